from typing import Any, Dict, List, Optional

import httpx

from storefront.services.session_service import SessionContext
from storefront.utils.cancellation import CancellationToken, check, guarded
from storefront.utils.logger import get_logger

logger = get_logger(__name__)


class StorefrontApiError(Exception):
    """Base class for every failure talking to the storefront REST API."""

    def __init__(self, message: str, server_message: Optional[str] = None):
        super().__init__(message)
        self.server_message = server_message


class ApiNetworkError(StorefrontApiError):
    """The request never produced a response (DNS, refused, timeout...)."""
    pass


class ApiStatusError(StorefrontApiError):
    """The API answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str, server_message: Optional[str] = None):
        super().__init__(message, server_message)
        self.status_code = status_code


class ApiEnvelopeError(StorefrontApiError):
    """The body is not a usable ``{success, data}`` envelope."""
    pass


class StorefrontApiAdapter:
    """
    Thin async adapter over the storefront REST API.

    Every method takes the caller's ``SessionContext`` explicitly and an
    optional ``CancellationToken``. Successful calls return the unwrapped
    ``data`` member of the envelope; everything else raises a
    ``StorefrontApiError`` subclass.
    """

    def __init__(self, http: httpx.AsyncClient, base_url: str):
        self.http = http
        self.base_url = base_url.rstrip("/")

    def _headers(self, session: Optional[SessionContext]) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if session is not None and session.bearer_token:
            headers["Authorization"] = f"Bearer {session.bearer_token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        session: Optional[SessionContext] = None,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
        cancel: Optional[CancellationToken] = None,
        require_data: bool = True,
    ) -> Any:
        check(cancel)
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            resp = await guarded(
                self.http.request(
                    method,
                    url,
                    headers=self._headers(session),
                    params=params or None,
                    json=json_body,
                ),
                cancel,
            )
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiNetworkError(f"{method} {path} failed: {e}") from e

        body = None
        try:
            body = resp.json()
        except ValueError:
            body = None

        server_message = body.get("message") if isinstance(body, dict) else None
        if not resp.is_success:
            raise ApiStatusError(
                resp.status_code,
                f"{method} {path} returned {resp.status_code}",
                server_message=server_message,
            )
        if not isinstance(body, dict):
            raise ApiEnvelopeError(f"{method} {path} returned a non-JSON body")
        if not body.get("success"):
            raise ApiEnvelopeError(
                f"{method} {path} returned an unsuccessful envelope",
                server_message=server_message,
            )
        data = body.get("data")
        if require_data and data is None:
            raise ApiEnvelopeError(f"{method} {path} returned no data")
        return data

    @staticmethod
    def _guest_params(session: SessionContext) -> Dict[str, str]:
        # an authenticated identity always wins over the guest one
        token = session.cart_guest_token
        return {"guestToken": token} if token else {}

    # --- cart ---

    async def get_cart(self, session: SessionContext, cancel: Optional[CancellationToken] = None) -> Dict:
        return await self._request(
            "GET", "/cart", session, params=self._guest_params(session), cancel=cancel
        )

    async def update_cart_item(
        self,
        session: SessionContext,
        item_id: str,
        quantity: int,
        cancel: Optional[CancellationToken] = None,
    ):
        return await self._request(
            "PUT",
            f"/cart/items/{item_id}",
            session,
            params=self._guest_params(session),
            json_body={"quantity": quantity},
            cancel=cancel,
            require_data=False,
        )

    async def remove_cart_item(
        self, session: SessionContext, item_id: str, cancel: Optional[CancellationToken] = None
    ):
        return await self._request(
            "DELETE",
            f"/cart/items/{item_id}",
            session,
            params=self._guest_params(session),
            cancel=cancel,
            require_data=False,
        )

    async def add_cart_item(
        self,
        session: SessionContext,
        cart_id: str,
        product_id: str,
        quantity: int = 1,
        cancel: Optional[CancellationToken] = None,
    ):
        return await self._request(
            "POST",
            f"/cart/{cart_id}/items",
            session,
            params=self._guest_params(session),
            json_body={"productId": product_id, "quantity": quantity},
            cancel=cancel,
            require_data=False,
        )

    # --- addresses / orders ---

    async def list_addresses(
        self, session: SessionContext, cancel: Optional[CancellationToken] = None
    ) -> List[Dict]:
        data = await self._request("GET", "/address", session, cancel=cancel)
        if not isinstance(data, list):
            raise ApiEnvelopeError("GET /address returned a non-list payload")
        return data

    async def create_order(
        self, session: SessionContext, cart_id: str, cancel: Optional[CancellationToken] = None
    ) -> Dict:
        return await self._request(
            "POST", "/orders", session, json_body={"cartId": cart_id}, cancel=cancel
        )

    # --- catalogue ---

    async def list_products(
        self,
        limit: int,
        session: Optional[SessionContext] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> List[Dict]:
        data = await self._request(
            "GET", "/products", session, params={"limit": limit}, cancel=cancel
        )
        if not isinstance(data, list):
            raise ApiEnvelopeError("GET /products returned a non-list payload")
        return data
