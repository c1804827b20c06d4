import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient


@pytest.fixture()
def client(_stockroom_domain):
    from stockroom.api import category_router, dashboard_router, product_router, register_exception_handlers

    app = FastAPI()

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        with _stockroom_domain.domain_context():
            return await call_next(request)

    app.include_router(product_router)
    app.include_router(category_router)
    app.include_router(dashboard_router)
    register_exception_handlers(app)
    return TestClient(app, raise_server_exceptions=False)
