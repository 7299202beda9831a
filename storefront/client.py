from typing import Optional

import httpx

from storefront.adapters.storefront_api import StorefrontApiAdapter
from storefront.config import Settings, settings as default_settings
from storefront.db import ClientSessionLocal, build_engine, build_session_factory, init_client_store
from storefront.services.cart_service import FALLBACK_CART_ITEMS, CartService, MutationStrategy
from storefront.services.catalogue_service import CatalogueService
from storefront.services.checkout_service import CheckoutService
from storefront.services.session_service import SessionContext, SessionService


class Storefront:
    """
    Wires the API adapter, the session store and the page services together.

    Usage:
        async with Storefront.from_settings() as shop:
            state = await shop.cart.load(shop.session())
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        db,
        config: Optional[Settings] = None,
    ):
        config = config or default_settings
        self.config = config
        self.http = http
        self.db = db
        # set by from_settings when it built a private session store engine
        self.engine = None
        self.api = StorefrontApiAdapter(http, config.API_BASE_URL)
        self.sessions = SessionService(db)
        self.cart = CartService(
            self.api,
            self.sessions,
            strategy=MutationStrategy(config.CART_MUTATION_STRATEGY),
            fallback_items=FALLBACK_CART_ITEMS if config.USE_FALLBACK_DATA else None,
        )
        self.checkout = CheckoutService(self.api, self.sessions, self.cart)
        self.catalogue = CatalogueService(
            self.api,
            default_limit=config.FEATURED_PRODUCTS_LIMIT,
            use_fallback=config.USE_FALLBACK_DATA,
        )

    @classmethod
    def from_settings(
        cls,
        config: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "Storefront":
        config = config or default_settings
        engine = None
        if config is default_settings:
            init_client_store()
            db = ClientSessionLocal()
        else:
            engine = build_engine(config.SESSION_STORE_URL)
            init_client_store(engine)
            db = build_session_factory(engine)()
        http = httpx.AsyncClient(timeout=config.REQUEST_TIMEOUT_SECONDS, transport=transport)
        shop = cls(http, db, config)
        shop.engine = engine
        return shop

    def session(self) -> SessionContext:
        return self.sessions.resolve()

    async def aclose(self):
        await self.http.aclose()
        self.db.close()
        if self.engine is not None:
            self.engine.dispose()

    async def __aenter__(self) -> "Storefront":
        return self

    async def __aexit__(self, *exc):
        await self.aclose()
