"""Stockroom FastAPI application.

Web server that dispatches commands and queries synchronously via HTTP.
Each request is wrapped in the stockroom domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"       → in-memory providers, event_processing = "sync"
#   - "production" → PostgreSQL, event_processing = "async"
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from stockroom.cache.query_cache import get_query_cache
from stockroom.config import get_settings
from stockroom.domain import stockroom
from stockroom.utils.logging import configure_logging

configure_logging()
stockroom.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Stockroom API",
    description="Product and category management with a dashboard and audit trail",
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
    """Push the Protean domain context for each request."""
    with stockroom.domain_context():
        return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from stockroom.api import (  # noqa: E402
    category_router,
    dashboard_router,
    product_router,
    register_exception_handlers,
)

app.include_router(product_router)
app.include_router(category_router)
app.include_router(dashboard_router)
register_exception_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    backend = get_query_cache().backend
    ping = getattr(backend, "ping", None)
    return JSONResponse(
        content={
            "status": "ok",
            "domain": stockroom.name,
            "cache": {
                "backend": get_settings().cache_backend,
                "reachable": ping() if ping is not None else True,
            },
        }
    )
