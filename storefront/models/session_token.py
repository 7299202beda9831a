from sqlalchemy import Column, DateTime, String, func

from storefront.db import ClientBase

BEARER_KEY = "token"
GUEST_KEY = "guestToken"


class StoredToken(ClientBase):
    """One row per identity slot, so a slot can hold at most one token."""

    __tablename__ = "client_tokens"
    key = Column(String(32), primary_key=True)
    value = Column(String(512), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
