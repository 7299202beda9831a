from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.api.deps import envelope
from storefront.db import get_db
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.product_schema import ProductOut

router = APIRouter(tags=["catalogue"])


@router.get("", summary="List products")
def list_products(
    q: Optional[str] = Query(None, description="search term"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=200),
    db: Session = Depends(get_db),
):
    repo = ProductRepository(db)
    items, total = repo.list(q=q, page=page, size=limit)
    return envelope(
        [ProductOut.from_model(p).model_dump() for p in items],
        pagination={"page": page, "limit": limit, "total": total},
    )


@router.get("/{product_id}", summary="Get product")
def get_product(product_id: str, db: Session = Depends(get_db)):
    p = ProductRepository(db).get(product_id)
    if not p:
        raise HTTPException(status_code=404, detail="Product not found")
    return envelope(ProductOut.from_model(p).model_dump())
