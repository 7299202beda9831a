from typing import Optional

from sqlalchemy.orm import Session

from storefront.models.cart import Cart
from storefront.models.cart_item import CartItem
from storefront.models.product import Product


class CartRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, cart_id: str) -> Optional[Cart]:
        return self.db.get(Cart, cart_id)

    def get_by_guest_token(self, guest_token: str) -> Optional[Cart]:
        return self.db.query(Cart).filter(Cart.guest_token == guest_token).first()

    def get_open_by_owner(self, owner_token: str) -> Optional[Cart]:
        return (
            self.db.query(Cart)
            .filter(Cart.owner_token == owner_token, Cart.checked_out == False)
            .first()
        )

    def create(self, guest_token: Optional[str] = None, owner_token: Optional[str] = None) -> Cart:
        c = Cart(guest_token=guest_token, owner_token=owner_token)
        self.db.add(c)
        self.db.flush()
        return c

    def get_item(self, item_id: str) -> Optional[CartItem]:
        return self.db.get(CartItem, item_id)

    def add_or_increment_item(self, cart: Cart, product: Product, qty: int) -> CartItem:
        item = next((it for it in cart.items if it.product_id == product.id), None)
        if item:
            item.quantity += qty
        else:
            item = CartItem(
                cart_id=cart.id,
                product_id=product.id,
                quantity=qty,
                position=len(cart.items),
            )
            self.db.add(item)
            cart.items.append(item)
        self.db.flush()
        return item

    def set_quantity(self, item: CartItem, qty: int) -> CartItem:
        item.quantity = qty
        self.db.flush()
        return item

    def remove_item(self, item: CartItem):
        cart = item.cart
        if cart is not None and item in cart.items:
            cart.items.remove(item)
        else:
            self.db.delete(item)
        self.db.flush()
