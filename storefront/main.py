from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from storefront.api.health import router as health_router
from storefront.api.routes_address import router as address_router
from storefront.api.routes_cart import router as cart_router
from storefront.api.routes_catalogue import router as catalogue_router
from storefront.api.routes_order import router as order_router
from storefront.config import settings
from storefront.db import init_db
from storefront.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    configure_logging(settings.LOG_LEVEL)
    init_db(seed=True)
    yield


app = FastAPI(title="Storefront Sandbox API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(HTTPException)
async def http_error(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
    )


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": f"Invalid {field}: {first.get('msg', 'bad request')}"},
    )


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": f"Internal server error: {type(exc).__name__}"},
    )


app.include_router(health_router, tags=["health"])

app.include_router(catalogue_router, prefix="/api/products", tags=["catalogue"])

app.include_router(cart_router, prefix="/api/cart", tags=["cart"])

app.include_router(address_router, prefix="/api/address", tags=["address"])

app.include_router(order_router, prefix="/api/orders", tags=["orders"])
