from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, String, func
from sqlalchemy.orm import relationship

from storefront.db import Base


class Cart(Base):
    __tablename__ = "carts"
    id = Column(String(32), primary_key=True, default=lambda: uuid4().hex)
    guest_token = Column(
        String(64), unique=True, index=True, nullable=True
    )  # anonymous identity
    owner_token = Column(
        String(256), nullable=True, index=True
    )  # bearer token of the signed-in user
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    checked_out = Column(Boolean, default=False, nullable=False)

    items = relationship(
        "CartItem",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItem.position",
    )
