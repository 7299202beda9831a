from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

from pydantic import ValidationError

from storefront.adapters.storefront_api import StorefrontApiAdapter, StorefrontApiError
from storefront.schemas.cart_schema import Cart, CartItem, CartOut
from storefront.services.pricing import OrderTotals, calculate_totals
from storefront.services.results import FetchError, FetchResult
from storefront.services.session_service import SessionContext, SessionService
from storefront.utils.cancellation import CancellationToken, check
from storefront.utils.logger import get_logger

logger = get_logger(__name__)

CART_LOAD_ERROR = "Failed to load the cart"
CART_UPDATE_ERROR = "Failed to update the quantity"
CART_REMOVE_ERROR = "Failed to remove the item"
CART_ADD_ERROR = "Failed to add the product to the cart"

# Shown when the cart API is unreachable and the fallback policy is on.
FALLBACK_CART_ITEMS: List[CartItem] = [
    CartItem(
        id="1",
        product_id="1",
        name="Organic fertilizer",
        price=250000,
        quantity=2,
        image="/images/fertilizer.jpg",
        category="Fertilizer",
    ),
    CartItem(
        id="2",
        product_id="2",
        name="Premium wheat seed",
        price=150000,
        quantity=1,
        image="/images/seeds.jpg",
        category="Seeds",
    ),
]


class MutationStrategy(str, Enum):
    OPTIMISTIC = "optimistic"  # keep the local change even if the server refused it
    ROLLBACK = "rollback"  # keep the local change only if the server accepted it


@dataclass
class CartState:
    cart_id: Optional[str] = None
    items: List[CartItem] = field(default_factory=list)
    error: Optional[str] = None
    using_fallback: bool = False

    @property
    def totals(self) -> OrderTotals:
        return calculate_totals(self.items)

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items


class CartService:
    """
    Cart page logic: load the server cart, change quantities, remove lines.

    Identity comes in as a ``SessionContext`` on every call. Failures never
    raise; they end up in ``state.error`` (and in the returned ``FetchResult``
    for ``fetch_cart``). ``OperationCancelled`` is the one exception that
    propagates, and a cancelled call leaves the state untouched.
    """

    def __init__(
        self,
        api: StorefrontApiAdapter,
        sessions: SessionService,
        strategy: MutationStrategy = MutationStrategy.OPTIMISTIC,
        fallback_items: Optional[List[CartItem]] = FALLBACK_CART_ITEMS,
    ):
        self.api = api
        self.sessions = sessions
        self.strategy = MutationStrategy(strategy)
        self.fallback_items = fallback_items
        self.state = CartState()

    async def fetch_cart(
        self, session: SessionContext, cancel: Optional[CancellationToken] = None
    ) -> FetchResult[Cart]:
        try:
            data = await self.api.get_cart(session, cancel=cancel)
            cart = Cart.from_api(CartOut.model_validate(data))
        except StorefrontApiError as e:
            logger.error("Error fetching cart: %s", e)
            return FetchResult.failure(FetchError.from_exception(e, CART_LOAD_ERROR))
        except ValidationError as e:
            logger.error("Malformed cart payload: %s", e)
            return FetchResult.failure(FetchError.malformed(CART_LOAD_ERROR, str(e)))
        return FetchResult.success(cart)

    async def load(
        self, session: SessionContext, cancel: Optional[CancellationToken] = None
    ) -> CartState:
        result = await self.fetch_cart(session, cancel=cancel)
        self.apply_fetch_result(result)
        return self.state

    def apply_fetch_result(self, result: FetchResult[Cart]) -> CartState:
        if result.ok:
            self.state = CartState(cart_id=result.value.id, items=list(result.value.items))
            return self.state

        if self.fallback_items is not None:
            logger.warning("Using fallback cart data")
            self.state = CartState(
                items=[it.model_copy() for it in self.fallback_items],
                error=result.error.message,
                using_fallback=True,
            )
        else:
            self.state = CartState(error=result.error.message)
        return self.state

    async def update_quantity(
        self,
        session: SessionContext,
        item_id: str,
        new_quantity: int,
        cancel: Optional[CancellationToken] = None,
    ) -> CartState:
        if new_quantity <= 0:
            return await self.remove_item(session, item_id, cancel=cancel)

        try:
            await self.api.update_cart_item(session, item_id, new_quantity, cancel=cancel)
            failed = False
        except StorefrontApiError as e:
            logger.error("Error updating quantity of item %s: %s", item_id, e)
            failed = True

        if failed:
            self.state.error = CART_UPDATE_ERROR
            if self.strategy is MutationStrategy.ROLLBACK:
                return self.state

        self.state.items = [
            it.model_copy(update={"quantity": new_quantity}) if it.id == item_id else it
            for it in self.state.items
        ]
        return self.state

    async def remove_item(
        self,
        session: SessionContext,
        item_id: str,
        cancel: Optional[CancellationToken] = None,
    ) -> CartState:
        try:
            await self.api.remove_cart_item(session, item_id, cancel=cancel)
            failed = False
        except StorefrontApiError as e:
            logger.error("Error removing item %s: %s", item_id, e)
            failed = True

        if failed:
            self.state.error = CART_REMOVE_ERROR
            if self.strategy is MutationStrategy.ROLLBACK:
                return self.state

        self.state.items = [it for it in self.state.items if it.id != item_id]
        return self.state

    async def add_product(
        self,
        session: SessionContext,
        product_id: str,
        quantity: int = 1,
        cancel: Optional[CancellationToken] = None,
    ) -> FetchResult[str]:
        """
        Put ``quantity`` of a product in the active cart and return the cart id.

        An anonymous visitor without a stored guest token adopts the one the
        server issued with the cart.
        """
        try:
            data = await self.api.get_cart(session, cancel=cancel)
            cart = CartOut.model_validate(data)

            check(cancel)
            if not session.authenticated and cart.guest_token and not session.guest_token:
                self.sessions.remember_guest_token(cart.guest_token)
                session = replace(session, guest_token=cart.guest_token)

            await self.api.add_cart_item(session, cart.id, product_id, quantity, cancel=cancel)
        except StorefrontApiError as e:
            logger.error("Error adding product %s to cart: %s", product_id, e)
            return FetchResult.failure(FetchError.from_exception(e, CART_ADD_ERROR))
        except ValidationError as e:
            logger.error("Malformed cart payload: %s", e)
            return FetchResult.failure(FetchError.malformed(CART_ADD_ERROR, str(e)))
        return FetchResult.success(cart.id)
