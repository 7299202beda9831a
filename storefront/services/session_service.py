from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from storefront.models.session_token import BEARER_KEY, GUEST_KEY
from storefront.repositories.session_repo import SessionTokenRepository
from storefront.utils.logger import get_logger, mask_token

logger = get_logger(__name__)


@dataclass(frozen=True)
class SessionContext:
    """Snapshot of the client identity, resolved once per operation."""

    bearer_token: Optional[str] = None
    guest_token: Optional[str] = None

    @property
    def authenticated(self) -> bool:
        return bool(self.bearer_token)

    @property
    def cart_guest_token(self) -> Optional[str]:
        """Guest token to send with cart calls; suppressed once signed in."""
        if self.authenticated:
            return None
        return self.guest_token


ANONYMOUS = SessionContext()


class SessionService:
    """
    Client-local identity storage (the ``token`` and ``guestToken`` slots).

    Reads go through ``resolve()`` so an operation works on one consistent
    snapshot instead of reading the store ad hoc.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = SessionTokenRepository(db)

    def resolve(self) -> SessionContext:
        return SessionContext(
            bearer_token=self.repo.get(BEARER_KEY),
            guest_token=self.repo.get(GUEST_KEY),
        )

    def sign_in(self, token: str) -> SessionContext:
        if not token:
            raise ValueError("Bearer token must not be empty")
        self.repo.put(BEARER_KEY, token)
        self.db.commit()
        return self.resolve()

    def sign_out(self) -> SessionContext:
        self.repo.delete(BEARER_KEY)
        self.db.commit()
        return self.resolve()

    def remember_guest_token(self, token: str) -> bool:
        """Persist a server-issued guest token unless one is already stored."""
        if not token:
            return False
        written = self.repo.put_if_absent(GUEST_KEY, token)
        self.db.commit()
        if written:
            logger.info("Stored guest token %s", mask_token(token))
        return written

    def forget_guest_token(self) -> bool:
        removed = self.repo.delete(GUEST_KEY)
        self.db.commit()
        return removed
