import httpx
import pytest

from storefront.services.catalogue_service import FALLBACK_PRODUCTS


def test_list_products(api):
    res = api.get("/api/products", params={"limit": 3})
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert isinstance(body["data"], list)
    assert len(body["data"]) == 3
    assert body["pagination"]["total"] == 6
    assert {"id", "title", "price", "images", "category"} <= set(body["data"][0])


def test_unknown_product_is_enveloped_404(api):
    res = api.get("/api/products/missing")
    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Product not found"}


@pytest.mark.asyncio
async def test_load_featured_maps_api_products(shop):
    products = await shop.catalogue.load_featured(limit=8)
    by_id = {p.id: p for p in products}
    assert len(products) == 6

    apple = by_id["p-apple-sapling"]
    assert apple.name == "Golden Delicious apple sapling on Malling rootstock"
    assert apple.price == 850000
    assert apple.category == "Fruit saplings"
    assert apple.image.startswith("https://images.unsplash.com/")
    assert all(4.5 <= p.rating <= 5.0 for p in products)

    wheat = by_id["p-wheat-seed"]
    assert wheat.category == "Product"
    assert wheat.image == "https://images.unsplash.com/photo-1560806887-1e4cd0b6cbd6?w=400"

    [req] = shop.transport.requests
    assert req.url.params["limit"] == "8"


@pytest.mark.asyncio
async def test_default_limit_comes_from_settings(shop):
    await shop.catalogue.fetch_products()
    assert shop.transport.requests[-1].url.params["limit"] == str(shop.config.FEATURED_PRODUCTS_LIMIT)


@pytest.mark.asyncio
async def test_unreachable_api_uses_fallback(broken_shop):
    result = await broken_shop.catalogue.fetch_products()
    assert not result.ok

    products = await broken_shop.catalogue.load_featured()
    assert [p.id for p in products] == ["1", "2", "3", "4"]
    assert products == FALLBACK_PRODUCTS
    assert all(p.name and p.image and p.category and p.rating for p in products)


@pytest.mark.asyncio
async def test_non_list_payload_uses_fallback(shop_factory):
    def handler(request):
        return httpx.Response(200, json={"success": True, "data": {"items": []}})

    shop = shop_factory(httpx.MockTransport(handler))
    products = await shop.catalogue.load_featured()
    assert len(products) == len(FALLBACK_PRODUCTS)
