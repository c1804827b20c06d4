"""Stockroom domain API package."""

from stockroom.api.errors import register_exception_handlers
from stockroom.api.routes import category_router, dashboard_router, product_router

__all__ = ["product_router", "category_router", "dashboard_router", "register_exception_handlers"]
