from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from storefront.adapters.storefront_api import (
    ApiEnvelopeError,
    ApiNetworkError,
    ApiStatusError,
    StorefrontApiError,
)

T = TypeVar("T")


class FetchErrorKind(str, Enum):
    NETWORK = "network"
    HTTP_STATUS = "http_status"
    ENVELOPE = "envelope"


@dataclass(frozen=True)
class FetchError:
    kind: FetchErrorKind
    message: str  # user facing, one per operation
    detail: str = ""
    status_code: Optional[int] = None
    server_message: Optional[str] = None

    @classmethod
    def from_exception(cls, exc: StorefrontApiError, message: str) -> "FetchError":
        if isinstance(exc, ApiNetworkError):
            kind = FetchErrorKind.NETWORK
        elif isinstance(exc, ApiStatusError):
            kind = FetchErrorKind.HTTP_STATUS
        else:
            kind = FetchErrorKind.ENVELOPE
        return cls(
            kind=kind,
            message=message,
            detail=str(exc),
            status_code=getattr(exc, "status_code", None),
            server_message=exc.server_message,
        )

    @classmethod
    def malformed(cls, message: str, detail: str) -> "FetchError":
        return cls.from_exception(ApiEnvelopeError(detail), message)


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Either a value or a ``FetchError``; never both."""

    value: Optional[T] = None
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "FetchResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: FetchError) -> "FetchResult[T]":
        return cls(error=error)
