"""Checkout FastAPI application.

Serves order intake, the Netopia IPN callback and order lookup. Every API
request runs inside the checkout domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay (test / production).
from checkout.catalog import InMemoryCatalog, set_catalog
from checkout.config import get_settings
from checkout.domain import checkout
from checkout.utils.logging import add_context, clear_context, configure_logging, get_logger
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

configure_logging()
checkout.init()

logger = get_logger(__name__)

# Local runs price carts from a catalogue file (CHECKOUT_CATALOG_FILE).
_settings = get_settings()
if _settings.catalog_file:
    set_catalog(InMemoryCatalog.from_json(_settings.catalog_file))
    logger.info("Loaded catalogue file", path=_settings.catalog_file)

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Checkout API",
    description="Cart validation, order intake and Netopia payment reconciliation",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the checkout domain context for API requests."""
    clear_context()
    add_context(method=request.method, path=request.url.path)
    if request.url.path.startswith("/api"):
        with checkout.domain_context():
            response = await call_next(request)
        return response
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from checkout.api import order_router, payment_router  # noqa: E402

app.include_router(payment_router)
app.include_router(order_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {"checkout": {"name": checkout.name}},
        }
    )
