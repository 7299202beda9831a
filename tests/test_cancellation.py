import asyncio

import httpx
import pytest

from storefront.services.checkout_service import CheckoutPhase
from storefront.utils.cancellation import CancellationToken, OperationCancelled

ONE_LINE = {
    "id": "i1",
    "quantity": 1,
    "product": {"id": "p1", "title": "Sapling", "price": 850000, "images": []},
}


@pytest.mark.asyncio
async def test_cancelled_token_sends_nothing(shop):
    token = CancellationToken()
    token.cancel("view closed")

    with pytest.raises(OperationCancelled):
        await shop.cart.load(shop.session(), cancel=token)
    assert shop.transport.requests == []
    assert shop.cart.state.items == []
    assert shop.cart.state.error is None


@pytest.mark.asyncio
async def test_cancel_mid_flight_aborts_request_and_keeps_state(shop_factory):
    started = asyncio.Event()

    async def handler(request):
        started.set()
        await asyncio.sleep(30)
        return httpx.Response(200, json={"success": True, "data": {"id": "c1", "items": []}})

    shop = shop_factory(httpx.MockTransport(handler))
    token = CancellationToken()
    before = shop.cart.state

    async def teardown():
        await started.wait()
        token.cancel()

    canceller = asyncio.ensure_future(teardown())
    with pytest.raises(OperationCancelled):
        await asyncio.wait_for(shop.cart.load(shop.session(), cancel=token), timeout=5)
    await canceller

    assert shop.cart.state is before
    assert shop.cart.state.items == []
    assert not shop.cart.state.using_fallback


@pytest.mark.asyncio
async def test_cancelled_submit_returns_to_ready(shop_factory):
    started = asyncio.Event()

    async def handler(request):
        if request.url.path.endswith("/orders"):
            started.set()
            await asyncio.sleep(30)
        if request.url.path.endswith("/address"):
            return httpx.Response(200, json={"success": True, "data": []})
        return httpx.Response(200, json={"success": True, "data": {"id": "c1", "items": [ONE_LINE]}})

    shop = shop_factory(httpx.MockTransport(handler))
    shop.sessions.sign_in("user-1")
    shop.sessions.remember_guest_token("guest-1")
    await shop.checkout.load(shop.session())

    token = CancellationToken()

    async def teardown():
        await started.wait()
        token.cancel()

    canceller = asyncio.ensure_future(teardown())
    with pytest.raises(OperationCancelled):
        await shop.checkout.place_order(shop.session(), cancel=token)
    await canceller

    assert shop.checkout.state.phase is CheckoutPhase.READY
    assert shop.checkout.state.order_id is None
    assert shop.session().guest_token == "guest-1"


@pytest.mark.asyncio
async def test_guard_passes_results_through():
    token = CancellationToken()

    async def work():
        return 42

    assert await token.guard(work()) == 42
    assert not token.cancelled
    token.cancel("bye")
    token.cancel("ignored")
    assert token.reason == "bye"


@pytest.mark.asyncio
async def test_cancel_between_requests_stores_no_guest_token(shop_factory):
    token = CancellationToken()
    seen = []

    def handler(request):
        seen.append((request.method, request.url.path))
        # the view goes away while the cart answer is on its way back
        token.cancel("view closed")
        return httpx.Response(
            200, json={"success": True, "data": {"id": "c1", "guestToken": "g-new", "items": []}}
        )

    shop = shop_factory(httpx.MockTransport(handler))
    with pytest.raises(OperationCancelled):
        await shop.cart.add_product(shop.session(), "p1", cancel=token)

    assert shop.session().guest_token is None
    assert seen == [("GET", "/api/cart")]
