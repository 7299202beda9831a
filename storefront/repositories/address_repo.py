from typing import List

from sqlalchemy.orm import Session

from storefront.models.address import Address


class AddressRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_for_owner(self, owner_token: str) -> List[Address]:
        return (
            self.db.query(Address)
            .filter(Address.owner_token == owner_token)
            .order_by(Address.is_default.desc(), Address.title)
            .all()
        )

    def add(self, owner_token: str, **fields) -> Address:
        if fields.get("is_default"):
            # a single default per owner
            for a in self.list_for_owner(owner_token):
                a.is_default = False
        a = Address(owner_token=owner_token, **fields)
        self.db.add(a)
        self.db.flush()
        return a
