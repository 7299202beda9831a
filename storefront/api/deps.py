from typing import Optional

from fastapi import Header, HTTPException


def bearer_token(authorization: Optional[str] = Header(None)) -> Optional[str]:
    """The opaque user identity; any bearer token is accepted by the sandbox."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def require_bearer(authorization: Optional[str] = Header(None)) -> str:
    token = bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=401, detail="Authentication required")
    return token


def envelope(data=None, **extra):
    body = {"success": True, "data": data}
    body.update(extra)
    return body
