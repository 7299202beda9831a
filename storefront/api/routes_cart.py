from typing import Optional
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.api.deps import bearer_token, envelope
from storefront.db import get_db
from storefront.models.cart import Cart
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.cart_schema import AddItemIn, CartItemOut, CartOut, UpdateQuantityIn
from storefront.schemas.product_schema import ProductOut

router = APIRouter(tags=["cart"])


def _cart_out(cart: Cart) -> dict:
    out = CartOut(
        id=cart.id,
        guest_token=cart.guest_token,
        items=[
            CartItemOut(id=it.id, quantity=it.quantity, product=ProductOut.from_model(it.product))
            for it in cart.items
        ],
    )
    return out.model_dump(by_alias=True)


def _resolve_cart(repo: CartRepository, token: Optional[str], guest_token: Optional[str]) -> Cart:
    if token:
        return repo.get_open_by_owner(token) or repo.create(owner_token=token)

    if guest_token:
        existing = repo.get_by_guest_token(guest_token)
        if existing and not existing.checked_out:
            return existing
        if not existing:
            return repo.create(guest_token=guest_token)
    return repo.create(guest_token=uuid4().hex)


def _can_access(cart: Cart, token: Optional[str], guest_token: Optional[str]) -> bool:
    if cart.checked_out:
        return False
    if token:
        return cart.owner_token == token or (cart.owner_token is None and cart.guest_token == guest_token)
    return cart.owner_token is None and guest_token is not None and cart.guest_token == guest_token


@router.get("", summary="Get cart")
def get_cart(
    guest_token: Optional[str] = Query(None, alias="guestToken"),
    token: Optional[str] = Depends(bearer_token),
    db: Session = Depends(get_db),
):
    repo = CartRepository(db)
    cart = _resolve_cart(repo, token, guest_token)
    db.commit()
    return envelope(_cart_out(cart))


@router.put("/items/{item_id}", summary="Update item quantity")
def update_item(
    item_id: str,
    payload: UpdateQuantityIn,
    guest_token: Optional[str] = Query(None, alias="guestToken"),
    token: Optional[str] = Depends(bearer_token),
    db: Session = Depends(get_db),
):
    repo = CartRepository(db)
    item = repo.get_item(item_id)
    if not item or not _can_access(item.cart, token, guest_token):
        raise HTTPException(status_code=404, detail="Cart item not found")
    repo.set_quantity(item, payload.quantity)
    db.commit()
    return envelope({"id": item.id, "quantity": item.quantity})


@router.delete("/items/{item_id}", summary="Remove item")
def remove_item(
    item_id: str,
    guest_token: Optional[str] = Query(None, alias="guestToken"),
    token: Optional[str] = Depends(bearer_token),
    db: Session = Depends(get_db),
):
    repo = CartRepository(db)
    item = repo.get_item(item_id)
    if not item or not _can_access(item.cart, token, guest_token):
        raise HTTPException(status_code=404, detail="Cart item not found")
    repo.remove_item(item)
    db.commit()
    return envelope(message="Item removed")


@router.post("/{cart_id}/items", summary="Add item to cart")
def add_item(
    cart_id: str,
    payload: AddItemIn,
    guest_token: Optional[str] = Query(None, alias="guestToken"),
    token: Optional[str] = Depends(bearer_token),
    db: Session = Depends(get_db),
):
    repo = CartRepository(db)
    cart = repo.get(cart_id)
    if not cart or not _can_access(cart, token, guest_token):
        raise HTTPException(status_code=404, detail="Cart not found")
    product = ProductRepository(db).get(payload.product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    item = repo.add_or_increment_item(cart, product, payload.quantity)
    db.commit()
    return envelope({"id": item.id, "quantity": item.quantity})
