"""Pydantic request/response schemas for the Stockroom API.

Request fields are deliberately loose (all optional, no bounds): the
dispatcher's validators own the rules and report every violation at once.
"""

from __future__ import annotations

from pydantic import BaseModel

from stockroom.shared.dto import ProductDTO, ProductPage

# --- Product Request Schemas ---


class ProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Wireless Mouse",
                    "description": "Ergonomic 2.4GHz mouse with USB receiver.",
                    "price": 89.9,
                    "category_id": "5b0c8f64-2c1f-4d4b-9a43-0f3c1d1c2a10",
                    "stock_quantity": 25,
                }
            ]
        }
    }

    name: str | None = None
    description: str | None = None
    price: float | None = None
    category_id: str | None = None
    stock_quantity: int | None = 0


# --- Category Request Schemas ---


class CategoryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Electronics",
                    "description": "Computers, peripherals and accessories.",
                }
            ]
        }
    }

    name: str | None = None
    description: str | None = None


# --- Response Schemas ---


class ProductPageResponse(BaseModel):
    items: list[ProductDTO]
    page: int
    page_size: int
    total_count: int
    total_pages: int
    has_previous_page: bool
    has_next_page: bool

    @classmethod
    def from_page(cls, page: ProductPage) -> ProductPageResponse:
        return cls(
            items=page.items,
            page=page.page,
            page_size=page.page_size,
            total_count=page.total_count,
            total_pages=page.total_pages,
            has_previous_page=page.has_previous_page,
            has_next_page=page.has_next_page,
        )
