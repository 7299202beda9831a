from typing import Optional
from uuid import uuid4

from sqlalchemy.orm import Session

from storefront.models.cart import Cart
from storefront.models.order import Order, OrderLine
from storefront.services.pricing import calculate_totals


class OrderRepository:
    def __init__(self, db: Session):
        self.db = db

    def _gen_order_number(self) -> str:
        return f"ORD-{uuid4().hex[:10].upper()}"

    def get(self, order_id: str) -> Optional[Order]:
        return self.db.get(Order, order_id)

    def create_from_cart(self, cart: Cart, owner_token: str) -> Order:
        """Snapshot the cart lines into an order and close the cart."""
        order = Order(
            order_number=self._gen_order_number(),
            cart_id=cart.id,
            owner_token=owner_token,
            status="PENDING",
        )
        for it in cart.items:
            order.lines.append(
                OrderLine(
                    product_id=it.product_id,
                    title=it.product.title,
                    quantity=it.quantity,
                    price=it.product.price,
                )
            )
        totals = calculate_totals(order.lines)
        order.subtotal = totals.subtotal
        order.shipping = totals.shipping
        order.tax = totals.tax
        order.total = totals.total

        cart.owner_token = owner_token
        cart.checked_out = True
        self.db.add(order)
        self.db.flush()
        return order
