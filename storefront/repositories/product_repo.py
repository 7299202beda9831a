from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from storefront.models.product import Product


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, product_id: str) -> Optional[Product]:
        return (
            self.db.query(Product)
            .filter(Product.id == product_id, Product.active == True)
            .first()
        )

    def list(
        self, q: Optional[str] = None, page: int = 1, size: int = 20
    ) -> Tuple[List[Product], int]:
        query = self.db.query(Product).filter(Product.active == True)
        if q:
            like = f"%{q}%"
            query = query.filter(
                (Product.title.ilike(like)) | (Product.description.ilike(like))
            )
        total = query.with_entities(func.count()).scalar() or 0
        items = query.order_by(Product.title).offset((page - 1) * size).limit(size).all()
        return items, total

    def create_or_update(
        self,
        product_id: str,
        title: str,
        price: int,
        images: Optional[List[str]] = None,
        category_name: Optional[str] = None,
        description: Optional[str] = None,
        active: bool = True,
    ) -> Product:
        p = self.db.get(Product, product_id)
        if p:
            p.title = title
            p.price = price
            p.images = list(images or [])
            p.category_name = category_name
            p.description = description
            p.active = active
        else:
            p = Product(
                id=product_id,
                title=title,
                price=price,
                images=list(images or []),
                category_name=category_name,
                description=description,
                active=active,
            )
            self.db.add(p)
        self.db.flush()
        return p
