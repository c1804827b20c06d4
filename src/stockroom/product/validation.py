"""Request rules for product commands and queries."""

from pydantic import Field

from stockroom.shared.validation import Reference, Rules, trimmed

MAX_PRICE = 1_000_000
MAX_STOCK_QUANTITY = 100_000


class CreateProductRules(Rules):
    name: trimmed(max_length=200)
    description: trimmed(max_length=1000)
    price: float = Field(gt=0)
    category_id: Reference
    stock_quantity: int = Field(ge=0)


class UpdateProductRules(Rules):
    """Updates are held to tighter bounds than creation."""

    product_id: Reference
    name: trimmed(min_length=3, max_length=200)
    description: trimmed(min_length=10, max_length=1000)
    price: float = Field(gt=0, le=MAX_PRICE)
    category_id: Reference
    stock_quantity: int = Field(ge=0, le=MAX_STOCK_QUANTITY)


class SearchTermRules(Rules):
    term: trimmed(min_length=2)


validate_create_product = CreateProductRules.check
validate_update_product = UpdateProductRules.check
validate_search_term = SearchTermRules.check
