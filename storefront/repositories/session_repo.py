from typing import Optional

from sqlalchemy.orm import Session

from storefront.models.session_token import StoredToken


class SessionTokenRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> Optional[str]:
        row = self.db.get(StoredToken, key)
        return row.value if row else None

    def put(self, key: str, value: str) -> StoredToken:
        row = self.db.get(StoredToken, key)
        if row:
            row.value = value
        else:
            row = StoredToken(key=key, value=value)
            self.db.add(row)
        self.db.flush()
        return row

    def put_if_absent(self, key: str, value: str) -> bool:
        if self.db.get(StoredToken, key):
            return False
        self.db.add(StoredToken(key=key, value=value))
        self.db.flush()
        return True

    def delete(self, key: str) -> bool:
        row = self.db.get(StoredToken, key)
        if not row:
            return False
        self.db.delete(row)
        self.db.flush()
        return True
