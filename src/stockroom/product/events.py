"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from stockroom.domain import stockroom


@stockroom.event(part_of="Product")
class ProductCreated:
    """A new product was added to the stockroom."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True, max_length=200)
    category_id: Identifier()
    price: Float()
    stock_quantity: Integer(default=0)
    created_at: DateTime(required=True)


@stockroom.event(part_of="Product")
class ProductStockUpdated:
    """A product's on-hand quantity changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    old_quantity: Integer(default=0)
    new_quantity: Integer(default=0)
    is_low_stock: Boolean(default=False)
    updated_at: DateTime(required=True)


@stockroom.event(part_of="Product")
class LowStockAlert:
    """A product dropped below the low-stock threshold."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True, max_length=200)
    current_quantity: Integer(default=0)
    threshold: Integer(required=True)
    detected_at: DateTime(required=True)
