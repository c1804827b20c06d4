"""Product read side: query objects and their handlers."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from pydantic import BaseModel, ConfigDict

from stockroom.cache.query_cache import PRODUCT_PREFIX, cache_key, get_query_cache
from stockroom.category.category import Category
from stockroom.product.product import Product
from stockroom.shared.dto import ProductDTO, ProductPage


class ProductQuery(BaseModel):
    model_config = ConfigDict(frozen=True)


class GetAllProducts(ProductQuery):
    page: int = 1
    page_size: int = 10
    category_id: str | None = None


class GetProductById(ProductQuery):
    product_id: str | None = None


class SearchProductsByName(ProductQuery):
    term: str | None = None


class GetLowStockProducts(ProductQuery):
    pass


class GetProductsByCategory(ProductQuery):
    category_id: str | None = None


def to_product_dtos(products):
    """Map products to DTOs, resolving category names with a single lookup."""
    category_ids = {str(product.category_id) for product in products}
    categories = current_domain.repository_for(Category).get_by_ids(category_ids)
    names = {str(category.id): category.name for category in categories}
    return [ProductDTO.from_product(product, names.get(str(product.category_id))) for product in products]


def get_all_products(query):
    def load():
        products, total = current_domain.repository_for(Product).get_all(
            query.page, query.page_size, category_id=query.category_id
        )
        return ProductPage(
            items=to_product_dtos(products),
            page=query.page,
            page_size=query.page_size,
            total_count=total,
        )

    return get_query_cache().get_or_load(cache_key(PRODUCT_PREFIX, query), ProductPage, load)


def get_product_by_id(query):
    product = current_domain.repository_for(Product).get_by_id(query.product_id)
    if product is None:
        raise ObjectNotFoundError({"_entity": [f"Product with id {query.product_id} not found"]})
    return to_product_dtos([product])[0]


def search_products_by_name(query):
    return to_product_dtos(current_domain.repository_for(Product).search_by_name(query.term.strip()))


def get_low_stock_products(query):
    return to_product_dtos(current_domain.repository_for(Product).get_low_stock())


def get_products_by_category(query):
    return to_product_dtos(current_domain.repository_for(Product).get_by_category_id(query.category_id))
