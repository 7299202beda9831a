from uuid import uuid4

from sqlalchemy import Boolean, Column, String

from storefront.db import Base


class Address(Base):
    __tablename__ = "addresses"
    id = Column(String(32), primary_key=True, default=lambda: uuid4().hex)
    owner_token = Column(String(256), nullable=False, index=True)
    title = Column(String(128), nullable=False)
    full_name = Column(String(256), nullable=False)
    street = Column(String(512), nullable=False)
    city = Column(String(128), nullable=False)
    province = Column(String(128), nullable=False)
    postal_code = Column(String(32), nullable=False)
    phone = Column(String(32), nullable=False)
    is_default = Column(Boolean, default=False, nullable=False)
