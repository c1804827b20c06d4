"""Wiring of every stockroom request type to its handler and validators."""

from protean.utils.globals import current_domain

from stockroom.cache.query_cache import CATEGORY_WRITE_PREFIXES, PRODUCT_WRITE_PREFIXES, get_query_cache
from stockroom.category.management import (
    CreateCategory,
    DeleteCategory,
    UpdateCategory,
    audit_category_created,
    audit_category_deleted,
    audit_category_updated,
)
from stockroom.category.queries import GetAllCategories, GetCategoryById, get_all_categories, get_category_by_id
from stockroom.category.validation import validate_create_category, validate_update_category
from stockroom.dashboard.queries import (
    GetDashboard,
    GetRecentAuditLogs,
    GetRecentProducts,
    get_dashboard,
    get_recent_audit_logs,
    get_recent_products,
    validate_recent_count,
)
from stockroom.product.management import (
    CreateProduct,
    DeleteProduct,
    UpdateProduct,
    audit_product_created,
    audit_product_deleted,
    audit_product_updated,
)
from stockroom.product.queries import (
    GetAllProducts,
    GetLowStockProducts,
    GetProductById,
    GetProductsByCategory,
    SearchProductsByName,
    get_all_products,
    get_low_stock_products,
    get_product_by_id,
    get_products_by_category,
    search_products_by_name,
)
from stockroom.product.validation import validate_create_product, validate_search_term, validate_update_product
from stockroom.shared.dispatcher import Dispatcher
from stockroom.shared.validation import validate_category_id, validate_pagination, validate_product_id


def process_command(command):
    """Run a command through the domain's handler inside its unit of work."""
    return current_domain.process(command, asynchronous=False)


def build_dispatcher(cache_provider=get_query_cache):
    dispatcher = Dispatcher(cache_provider=cache_provider)

    # Commands
    dispatcher.register(
        CreateProduct,
        process_command,
        validators=[validate_create_product],
        audit=audit_product_created,
        invalidates=PRODUCT_WRITE_PREFIXES,
    )
    dispatcher.register(
        UpdateProduct,
        process_command,
        validators=[validate_update_product],
        audit=audit_product_updated,
        invalidates=PRODUCT_WRITE_PREFIXES,
    )
    dispatcher.register(
        DeleteProduct,
        process_command,
        validators=[validate_product_id],
        audit=audit_product_deleted,
        invalidates=PRODUCT_WRITE_PREFIXES,
    )
    dispatcher.register(
        CreateCategory,
        process_command,
        validators=[validate_create_category],
        audit=audit_category_created,
        invalidates=CATEGORY_WRITE_PREFIXES,
    )
    dispatcher.register(
        UpdateCategory,
        process_command,
        validators=[validate_update_category],
        audit=audit_category_updated,
        invalidates=CATEGORY_WRITE_PREFIXES,
    )
    dispatcher.register(
        DeleteCategory,
        process_command,
        validators=[validate_category_id],
        audit=audit_category_deleted,
        invalidates=CATEGORY_WRITE_PREFIXES,
    )

    # Queries
    dispatcher.register(GetAllProducts, get_all_products, validators=[validate_pagination])
    dispatcher.register(
        GetProductById,
        get_product_by_id,
        validators=[validate_product_id],
    )
    dispatcher.register(SearchProductsByName, search_products_by_name, validators=[validate_search_term])
    dispatcher.register(GetLowStockProducts, get_low_stock_products)
    dispatcher.register(
        GetProductsByCategory,
        get_products_by_category,
        validators=[validate_category_id],
    )
    dispatcher.register(GetAllCategories, get_all_categories)
    dispatcher.register(
        GetCategoryById,
        get_category_by_id,
        validators=[validate_category_id],
    )
    dispatcher.register(GetDashboard, get_dashboard)
    dispatcher.register(GetRecentProducts, get_recent_products, validators=[validate_recent_count])
    dispatcher.register(GetRecentAuditLogs, get_recent_audit_logs, validators=[validate_recent_count])

    return dispatcher


dispatcher = build_dispatcher()
