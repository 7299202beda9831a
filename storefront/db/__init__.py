import importlib

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.config import settings
from storefront.utils.logger import get_logger

logger = get_logger(__name__)

# Sandbox API tables (carts, products, orders...) and the client-local
# token store live in separate databases, so they get separate metadata.
Base = declarative_base()
ClientBase = declarative_base()


def build_engine(url: str):
    """
    Create an engine for ``url``.

    In-memory SQLite needs a single shared connection, otherwise every
    pooled connection would see its own empty database.
    """
    if url.startswith("sqlite") and (":memory:" in url or url in ("sqlite://", "sqlite:///")):
        return create_engine(
            url,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if url.startswith("sqlite"):
        return create_engine(url, future=True, connect_args={"check_same_thread": False})
    return create_engine(url, future=True)


def build_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


engine = build_engine(settings.DATABASE_URL)
SessionLocal = build_session_factory(engine)

client_engine = build_engine(settings.SESSION_STORE_URL)
ClientSessionLocal = build_session_factory(client_engine)

# model modules must be imported before create_all so metadata is populated
SANDBOX_MODEL_MODULES = [
    "storefront.models.product",
    "storefront.models.cart",
    "storefront.models.cart_item",
    "storefront.models.address",
    "storefront.models.order",
]
CLIENT_MODEL_MODULES = [
    "storefront.models.session_token",
]


def init_db(bind=None, reset: bool = False, seed: bool = False):
    """
    Initialize the sandbox API schema on ``bind`` (defaults to the configured engine).

    ``reset`` drops and recreates all tables; ``seed`` loads the demo catalogue
    and addresses (idempotent).
    """
    bind = bind or engine
    for mod in SANDBOX_MODEL_MODULES:
        importlib.import_module(mod)

    if reset:
        logger.info("Resetting sandbox database")
        Base.metadata.drop_all(bind=bind)
    Base.metadata.create_all(bind=bind)

    if seed:
        from storefront.db.seed import seed_demo_data

        s = build_session_factory(bind)()
        try:
            created = seed_demo_data(s)
            s.commit()
            if created:
                logger.info("Seeded %d sandbox rows", created)
        finally:
            s.close()


def init_client_store(bind=None):
    bind = bind or client_engine
    for mod in CLIENT_MODEL_MODULES:
        importlib.import_module(mod)
    ClientBase.metadata.create_all(bind=bind)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
