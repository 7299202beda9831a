#!/usr/bin/env python3
"""
Seed the sandbox API database.

Without arguments loads the demo catalogue and the demo user's addresses.
With --file, products are read from a JSON file shaped like the API
(a list, or an object with a "data"/"items" list, of {id, title, price,
images, category: {name}}).

Usage:
    python scripts/seed_products.py
    python scripts/seed_products.py --file catalogue.json --reset
"""
import argparse
import json
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from storefront.db import SessionLocal, init_db
from storefront.repositories.product_repo import ProductRepository
from storefront.utils.logger import configure_logging, get_logger

logger = get_logger("seed_products")


def _normalize_entry(entry):
    """Return kwargs for ProductRepository.create_or_update, or None if unusable."""
    product_id = entry.get("id") or entry.get("productId")
    title = entry.get("title") or entry.get("name") or ""
    if not product_id or not title:
        return None

    try:
        price = int(entry.get("price", 0) or 0)
    except (TypeError, ValueError):
        price = 0

    images = entry.get("images")
    if not images:
        image = entry.get("image")
        images = [image] if image else []

    category = entry.get("category")
    if isinstance(category, dict):
        category = category.get("name")

    return {
        "product_id": str(product_id),
        "title": title,
        "price": price,
        "images": list(images),
        "category_name": category,
        "description": entry.get("description"),
    }


def seed_from_file(path: str) -> int:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except ValueError as e:
            raise RuntimeError(f"Failed to parse JSON from {path}: {e}")

    if isinstance(data, dict):
        source_list = data.get("data") or data.get("items") or []
    elif isinstance(data, list):
        source_list = data
    else:
        source_list = []

    db = SessionLocal()
    repo = ProductRepository(db)
    created = 0
    try:
        for entry in source_list:
            fields = _normalize_entry(entry)
            if not fields:
                logger.warning("Skipping product entry without id/title: %r", entry)
                continue
            repo.create_or_update(**fields)
            created += 1
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
    return created


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=None, help="Path to a product JSON file")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate the sandbox tables first")
    args = parser.parse_args()

    configure_logging()

    init_db(reset=args.reset, seed=args.file is None)
    if args.file:
        if not os.path.exists(args.file):
            print("File not found:", args.file)
            sys.exit(1)
        print("Seeded products:", seed_from_file(args.file))
    else:
        print("Seeded demo data")
