"""Dashboard read side: store-wide totals, recent products and recent activity.

The totals are independent reads; concurrent writes may leave them briefly
inconsistent with each other until the next cache invalidation.
"""

from protean.utils.globals import current_domain
from pydantic import BaseModel, ConfigDict, Field

from stockroom.audit.audit_log import AuditLog
from stockroom.cache.query_cache import DASHBOARD_PREFIX, PRODUCT_PREFIX, cache_key, get_query_cache
from stockroom.category.category import Category
from stockroom.product.product import Product
from stockroom.shared.context import checkpoint
from stockroom.shared.dto import UNKNOWN_CATEGORY, AuditLogDTO, DashboardDTO, RecentProductDTO
from stockroom.shared.validation import Rules

DEFAULT_RECENT_COUNT = 10


class GetDashboard(BaseModel):
    model_config = ConfigDict(frozen=True)


class GetRecentProducts(BaseModel):
    model_config = ConfigDict(frozen=True)

    count: int = DEFAULT_RECENT_COUNT


class GetRecentAuditLogs(BaseModel):
    model_config = ConfigDict(frozen=True)

    count: int = DEFAULT_RECENT_COUNT


class RecentCountRules(Rules):
    count: int = Field(gt=0)


validate_recent_count = RecentCountRules.check


def get_dashboard(query):
    def load():
        products = current_domain.repository_for(Product)
        categories = current_domain.repository_for(Category)

        total_products = products.get_total_count()
        checkpoint()
        total_stock_value = products.get_total_stock_value()
        checkpoint()
        low_stock_count = len(products.get_low_stock())
        checkpoint()
        products_by_category = categories.get_product_count_by_category()

        return DashboardDTO(
            total_products=total_products,
            total_stock_value=round(total_stock_value.amount, 2),
            low_stock_count=low_stock_count,
            products_by_category=products_by_category,
        )

    return get_query_cache().get_or_load(cache_key(DASHBOARD_PREFIX, query), DashboardDTO, load)


def get_recent_products(query):
    def load():
        products = current_domain.repository_for(Product).get_recent(query.count)
        category_ids = {str(product.category_id) for product in products}
        categories = current_domain.repository_for(Category).get_by_ids(category_ids)
        names = {str(category.id): category.name for category in categories}

        return [
            RecentProductDTO(
                id=str(product.id),
                name=product.name,
                price=product.price,
                category_name=names.get(str(product.category_id), UNKNOWN_CATEGORY),
                stock_quantity=product.stock_quantity,
                created_at=product.created_at,
            )
            for product in products
        ]

    return get_query_cache().get_or_load(cache_key(PRODUCT_PREFIX, query), list[RecentProductDTO], load)


def get_recent_audit_logs(query):
    entries = current_domain.repository_for(AuditLog).get_recent(query.count)
    return [AuditLogDTO.from_audit_log(entry) for entry in entries]
