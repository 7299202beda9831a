from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from storefront.adapters.storefront_api import StorefrontApiAdapter, StorefrontApiError
from storefront.schemas.address_schema import AddressOut
from storefront.schemas.cart_schema import CartItem
from storefront.schemas.order_schema import OrderCreatedOut, PaymentMethod
from storefront.services.cart_service import CartService
from storefront.services.pricing import OrderTotals, calculate_totals
from storefront.services.session_service import SessionContext, SessionService
from storefront.utils.cancellation import CancellationToken, OperationCancelled
from storefront.utils.logger import get_logger

logger = get_logger(__name__)

CHECKOUT_LOAD_ERROR = "Failed to load checkout data"
CART_NOT_FOUND_ERROR = "Cart not found"
EMPTY_CART_ERROR = "Your cart is empty"
ADDRESS_REQUIRED_ERROR = "Please select a delivery address"
LOGIN_REQUIRED_ERROR = "Please sign in to your account first"
ORDER_FAILED_ERROR = "Failed to place the order. Please try again."

LOGIN_PATH = "/login"
ORDER_SUCCESS_PATH = "/order-success"


class CheckoutPhase(str, Enum):
    LOADING = "loading"
    READY = "ready"
    SUBMITTING = "submitting"
    SUCCESS = "success"


@dataclass(frozen=True)
class Navigation:
    path: str
    state: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CheckoutState:
    phase: CheckoutPhase = CheckoutPhase.LOADING
    cart_id: Optional[str] = None
    items: List[CartItem] = field(default_factory=list)
    addresses: List[AddressOut] = field(default_factory=list)
    selected_address_id: Optional[str] = None
    payment_method: PaymentMethod = PaymentMethod.CASH_ON_DELIVERY
    notes: str = ""
    error: Optional[str] = None
    order_id: Optional[str] = None

    @property
    def totals(self) -> OrderTotals:
        return calculate_totals(self.items)

    @property
    def selected_address(self) -> Optional[AddressOut]:
        return next((a for a in self.addresses if a.id == self.selected_address_id), None)


class CheckoutService:
    """
    Checkout page flow: loading -> ready -> submitting -> success.

    A failed load or submit keeps the flow in ``ready`` with ``state.error``
    set, so the user can retry. Submitting twice may create two orders; the
    API gives no idempotency guarantee.
    """

    def __init__(self, api: StorefrontApiAdapter, sessions: SessionService, carts: CartService):
        self.api = api
        self.sessions = sessions
        self.carts = carts
        self.state = CheckoutState()

    async def load(
        self, session: SessionContext, cancel: Optional[CancellationToken] = None
    ) -> CheckoutState:
        state = CheckoutState()

        result = await self.carts.fetch_cart(session, cancel=cancel)
        if result.ok:
            state.cart_id = result.value.id
            state.items = list(result.value.items)
        else:
            state.error = CHECKOUT_LOAD_ERROR

        # saved addresses are only available to signed-in users
        if session.authenticated:
            try:
                data = await self.api.list_addresses(session, cancel=cancel)
                state.addresses = [AddressOut.model_validate(a) for a in data]
            except (StorefrontApiError, ValidationError) as e:
                logger.error("Error loading addresses: %s", e)
                state.error = CHECKOUT_LOAD_ERROR
            default = next((a for a in state.addresses if a.is_default), None)
            if default:
                state.selected_address_id = default.id

        state.phase = CheckoutPhase.READY
        self.state = state
        return self.state

    def select_address(self, address_id: str):
        if not any(a.id == address_id for a in self.state.addresses):
            raise ValueError(f"Unknown address {address_id}")
        self.state.selected_address_id = address_id

    def set_payment_method(self, method):
        self.state.payment_method = PaymentMethod(method)

    def set_notes(self, notes: str):
        self.state.notes = notes or ""

    async def place_order(
        self, session: SessionContext, cancel: Optional[CancellationToken] = None
    ) -> Optional[Navigation]:
        """
        Submit the order for the loaded cart.

        Returns where the caller should navigate next (order confirmation or
        login), or ``None`` when the flow stays on the checkout page.
        """
        state = self.state
        if state.phase is CheckoutPhase.SUBMITTING:
            return None
        if not state.cart_id:
            state.error = CART_NOT_FOUND_ERROR
            return None
        if not state.items:
            state.error = EMPTY_CART_ERROR
            return None
        if state.addresses and not state.selected_address:
            state.error = ADDRESS_REQUIRED_ERROR
            return None
        if not session.authenticated:
            state.error = LOGIN_REQUIRED_ERROR
            return Navigation(LOGIN_PATH)

        state.phase = CheckoutPhase.SUBMITTING
        state.error = None
        try:
            data = await self.api.create_order(session, state.cart_id, cancel=cancel)
            order = OrderCreatedOut.model_validate(data)
        except StorefrontApiError as e:
            logger.error("Error placing order for cart %s: %s", state.cart_id, e)
            state.error = e.server_message or ORDER_FAILED_ERROR
            state.phase = CheckoutPhase.READY
            return None
        except ValidationError as e:
            logger.error("Malformed order payload: %s", e)
            state.error = ORDER_FAILED_ERROR
            state.phase = CheckoutPhase.READY
            return None
        except OperationCancelled:
            # torn down mid-flight: nothing recorded
            state.phase = CheckoutPhase.READY
            raise

        # the cart now belongs to the order
        self.sessions.forget_guest_token()
        state.order_id = order.id
        state.phase = CheckoutPhase.SUCCESS
        logger.info("Order %s placed for cart %s", order.id, state.cart_id)
        return Navigation(ORDER_SUCCESS_PATH, {"orderId": order.id})
