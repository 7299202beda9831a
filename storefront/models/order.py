from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from storefront.db import Base


def _now():
    return datetime.now(timezone.utc)


class Order(Base):
    __tablename__ = "orders"
    id = Column(String(32), primary_key=True, default=lambda: uuid4().hex)
    order_number = Column(String(32), unique=True, nullable=False, index=True)
    cart_id = Column(String(32), ForeignKey("carts.id"), nullable=False, index=True)
    owner_token = Column(String(256), nullable=False, index=True)
    status = Column(String(32), nullable=False, default="PENDING")  # PENDING, PAID, CANCELLED
    subtotal = Column(Integer, nullable=False, default=0)
    shipping = Column(Integer, nullable=False, default=0)
    tax = Column(Integer, nullable=False, default=0)
    total = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)

    lines = relationship(
        "OrderLine", back_populates="order", cascade="all, delete-orphan"
    )


class OrderLine(Base):
    __tablename__ = "order_lines"
    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(32), ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(String(32), nullable=False)
    title = Column(String(256), nullable=True)
    quantity = Column(Integer, nullable=False)
    price = Column(Integer, nullable=False)

    order = relationship("Order", back_populates="lines")
