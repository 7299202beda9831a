from uuid import uuid4

from sqlalchemy import JSON, Boolean, Column, Integer, String, Text

from storefront.db import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(String(32), primary_key=True, default=lambda: uuid4().hex)
    title = Column(String(256), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Integer, nullable=False, default=0)  # whole currency units
    images = Column(JSON, nullable=False, default=list)
    category_name = Column(String(128), nullable=True)
    active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<Product id={self.id} title={self.title}>"
