from typing import List, Optional

from pydantic import ValidationError

from storefront.adapters.storefront_api import StorefrontApiAdapter, StorefrontApiError
from storefront.schemas.product_schema import CatalogueProduct, ProductOut
from storefront.services.results import FetchError, FetchResult
from storefront.services.session_service import SessionContext
from storefront.utils.cancellation import CancellationToken
from storefront.utils.logger import get_logger

logger = get_logger(__name__)

CATALOGUE_LOAD_ERROR = "Failed to load products"

# Fallback products in case the API fails
FALLBACK_PRODUCTS: List[CatalogueProduct] = [
    CatalogueProduct(
        id="1",
        name="Golden Delicious apple sapling on Malling rootstock",
        price=850000,
        original_price=1000000,
        image="https://images.unsplash.com/photo-1560806887-1e4cd0b6cbd6?w=400",
        category="Fruit saplings",
        rating=4.8,
    ),
    CatalogueProduct(
        id="2",
        name="Organic NPK fertilizer for fruit trees",
        price=450000,
        image="https://images.unsplash.com/photo-1416879595882-3373a0480b5b?w=400",
        category="Fertilizer",
        rating=4.6,
    ),
    CatalogueProduct(
        id="3",
        name="Smart drip irrigation system",
        price=2500000,
        original_price=3000000,
        image="https://images.unsplash.com/photo-1563514227147-6d2ff665a6a0?w=400",
        category="Irrigation",
        rating=4.9,
    ),
    CatalogueProduct(
        id="4",
        name="Greenhouse tomato seed",
        price=180000,
        image="https://images.unsplash.com/photo-1592921870789-04563d55041c?w=400",
        category="Seeds",
        rating=4.7,
    ),
]


class CatalogueService:
    def __init__(self, api: StorefrontApiAdapter, default_limit: int = 8, use_fallback: bool = True):
        self.api = api
        self.default_limit = default_limit
        self.use_fallback = use_fallback

    async def fetch_products(
        self,
        limit: Optional[int] = None,
        session: Optional[SessionContext] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> FetchResult[List[CatalogueProduct]]:
        limit = limit or self.default_limit
        try:
            data = await self.api.list_products(limit, session=session, cancel=cancel)
            products = [CatalogueProduct.from_api(ProductOut.model_validate(p)) for p in data]
        except StorefrontApiError as e:
            logger.error("Error fetching products: %s", e)
            return FetchResult.failure(FetchError.from_exception(e, CATALOGUE_LOAD_ERROR))
        except ValidationError as e:
            logger.error("Malformed product payload: %s", e)
            return FetchResult.failure(FetchError.malformed(CATALOGUE_LOAD_ERROR, str(e)))
        return FetchResult.success(products)

    async def load_featured(
        self,
        limit: Optional[int] = None,
        session: Optional[SessionContext] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> List[CatalogueProduct]:
        """Featured products for the home page; the fallback list when the API is down."""
        result = await self.fetch_products(limit, session=session, cancel=cancel)
        if result.ok:
            return result.value
        if not self.use_fallback:
            return []
        return [p.model_copy() for p in FALLBACK_PRODUCTS]
