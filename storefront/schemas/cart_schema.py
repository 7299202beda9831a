from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.schemas.product_schema import PLACEHOLDER_IMAGE, ProductOut

UNCATEGORIZED = "Uncategorized"


class CartItemOut(BaseModel):
    id: str
    quantity: int
    product: ProductOut


class CartOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    id: str
    guest_token: Optional[str] = Field(default=None, alias="guestToken")
    items: List[CartItemOut] = []


class CartItem(BaseModel):
    """Flat cart line used by the cart and checkout views."""

    id: str
    product_id: str
    name: str
    price: int
    quantity: int
    category: str = UNCATEGORIZED
    image: str = PLACEHOLDER_IMAGE

    @classmethod
    def from_api(cls, item: CartItemOut) -> "CartItem":
        p = item.product
        return cls(
            id=item.id,
            product_id=p.id,
            name=p.title,
            price=p.price,
            quantity=item.quantity,
            category=p.category.name if p.category else UNCATEGORIZED,
            image=p.images[0] if p.images else PLACEHOLDER_IMAGE,
        )


class Cart(BaseModel):
    id: str
    guest_token: Optional[str] = None
    items: List[CartItem] = []

    @classmethod
    def from_api(cls, cart: CartOut) -> "Cart":
        return cls(
            id=cart.id,
            guest_token=cart.guest_token,
            items=[CartItem.from_api(it) for it in cart.items],
        )


class UpdateQuantityIn(BaseModel):
    quantity: int = Field(..., gt=0)


class AddItemIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    product_id: str = Field(..., alias="productId")
    quantity: int = Field(1, gt=0)
