import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from storefront.client import Storefront
from storefront.config import Settings
from storefront.db import build_engine, build_session_factory, get_db, init_client_store, init_db
from storefront.main import app

SANDBOX_URL = "http://sandbox/api"


class RecordingTransport(httpx.AsyncBaseTransport):
    """Forwards to another transport and keeps every request it saw."""

    def __init__(self, inner: httpx.AsyncBaseTransport):
        self.inner = inner
        self.requests = []

    async def handle_async_request(self, request):
        self.requests.append(request)
        return await self.inner.handle_async_request(request)


@pytest.fixture
def sandbox_engine():
    engine = build_engine("sqlite://")
    init_db(bind=engine, seed=True)
    yield engine
    engine.dispose()


@pytest.fixture
def sandbox_app(sandbox_engine):
    TestingSession = build_session_factory(sandbox_engine)

    def _get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def api(sandbox_app):
    # no context manager: the lifespan would seed the on-disk database
    return TestClient(sandbox_app)


@pytest.fixture
def client_db():
    engine = build_engine("sqlite://")
    init_client_store(engine)
    db = build_session_factory(engine)()
    yield db
    db.close()
    engine.dispose()


def make_shop(transport, client_db, **overrides) -> Storefront:
    config = Settings(API_BASE_URL=SANDBOX_URL, **overrides)
    return Storefront(httpx.AsyncClient(transport=transport), client_db, config)


@pytest_asyncio.fixture
async def shop_factory(client_db):
    """Build clients over an arbitrary transport; closed at teardown."""
    made = []

    def _make(transport, **overrides):
        s = make_shop(transport, client_db, **overrides)
        made.append(s)
        return s

    yield _make
    for s in made:
        await s.http.aclose()


@pytest_asyncio.fixture
async def shop(sandbox_app, client_db):
    transport = RecordingTransport(httpx.ASGITransport(app=sandbox_app))
    s = make_shop(transport, client_db)
    s.transport = transport
    yield s
    await s.http.aclose()


@pytest_asyncio.fixture
async def broken_shop(client_db):
    """A client whose API always answers 500."""

    def handler(request):
        return httpx.Response(500, json={"success": False, "message": "boom"})

    s = make_shop(httpx.MockTransport(handler), client_db)
    yield s
    await s.http.aclose()
