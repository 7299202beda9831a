from uuid import uuid4

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from storefront.db import Base


class CartItem(Base):
    __tablename__ = "cart_items"
    id = Column(String(32), primary_key=True, default=lambda: uuid4().hex)
    cart_id = Column(
        String(32), ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id = Column(String(32), ForeignKey("products.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False, default=1)
    position = Column(Integer, nullable=False, default=0)  # insertion order

    cart = relationship("Cart", back_populates="items")
    product = relationship("Product", lazy="joined")
