"""Response shapes returned by command and query handlers."""

from __future__ import annotations

from datetime import datetime
from math import ceil

from pydantic import BaseModel, ConfigDict, Field

UNKNOWN_CATEGORY = "Unknown"


class ProductDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    sku: str | None = None
    name: str
    description: str
    price: float
    category_id: str
    category_name: str = UNKNOWN_CATEGORY
    stock_quantity: int
    is_low_stock: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_product(cls, product, category_name=None):
        return cls(
            id=str(product.id),
            sku=product.sku,
            name=product.name,
            description=product.description,
            price=product.price,
            category_id=str(product.category_id),
            category_name=category_name or UNKNOWN_CATEGORY,
            stock_quantity=product.stock_quantity,
            is_low_stock=product.is_low_stock(),
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class RecentProductDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: float
    category_name: str = UNKNOWN_CATEGORY
    stock_quantity: int
    created_at: datetime


class CategoryDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_category(cls, category):
        return cls(
            id=str(category.id),
            name=category.name,
            description=category.description,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )


class AuditLogDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str
    username: str
    action: str
    entity_type: str
    entity_id: str
    entity_name: str | None = None
    details: str | None = None
    created_at: datetime

    @classmethod
    def from_audit_log(cls, log):
        return cls(
            id=str(log.id),
            user_id=log.user_id,
            username=log.username,
            action=log.action,
            entity_type=log.entity_type,
            entity_id=str(log.entity_id),
            entity_name=log.entity_name,
            details=log.details,
            created_at=log.created_at,
        )


class DashboardDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_products: int = 0
    total_stock_value: float = 0.0
    low_stock_count: int = 0
    products_by_category: dict[str, int] = Field(default_factory=dict)


class DeletedDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str | None = None
    deleted: bool = True


class ProductPage(BaseModel):
    model_config = ConfigDict(frozen=True)

    items: list[ProductDTO]
    page: int
    page_size: int
    total_count: int

    @property
    def total_pages(self) -> int:
        return ceil(self.total_count / self.page_size) if self.page_size else 0

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages
