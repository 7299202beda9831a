from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import envelope, require_bearer
from storefront.db import get_db
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.order_repo import OrderRepository
from storefront.schemas.order_schema import PlaceOrderIn
from storefront.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["orders"])


@router.post("", summary="Create order (checkout)", status_code=201)
def create_order(
    payload: PlaceOrderIn,
    token: str = Depends(require_bearer),
    db: Session = Depends(get_db),
):
    cart = CartRepository(db).get(payload.cart_id)
    # a guest cart can be claimed by whoever signs in with it
    if not cart or cart.owner_token not in (None, token):
        raise HTTPException(status_code=404, detail="Cart not found")
    if cart.checked_out:
        raise HTTPException(status_code=409, detail="Cart already checked out")
    if not cart.items:
        raise HTTPException(status_code=400, detail="Cart is empty")

    order = OrderRepository(db).create_from_cart(cart, token)
    db.commit()
    logger.info("Created order %s total=%s", order.order_number, order.total)
    return envelope(
        {"id": order.id, "orderNumber": order.order_number, "total": order.total}
    )


@router.get("/{order_id}", summary="Get order")
def get_order(order_id: str, token: str = Depends(require_bearer), db: Session = Depends(get_db)):
    order = OrderRepository(db).get(order_id)
    if not order or order.owner_token != token:
        raise HTTPException(status_code=404, detail="Order not found")
    return envelope(
        {
            "id": order.id,
            "orderNumber": order.order_number,
            "cartId": order.cart_id,
            "status": order.status,
            "subtotal": order.subtotal,
            "shipping": order.shipping,
            "tax": order.tax,
            "total": order.total,
            "lines": [
                {"productId": ln.product_id, "title": ln.title, "quantity": ln.quantity, "price": ln.price}
                for ln in order.lines
            ],
        }
    )
