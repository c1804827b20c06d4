"""Product aggregate root."""

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String

from stockroom.domain import stockroom
from stockroom.shared.clock import next_timestamp, utcnow
from stockroom.shared.money import Money
from stockroom.shared.stock import LOW_STOCK_THRESHOLD, StockQuantity

SKU_PREFIX = "PRD"


@stockroom.aggregate
class Product:
    """A stocked item with a price and an on-hand quantity."""

    sku: String(max_length=20)
    name: String(required=True, max_length=200, sanitize=False)
    description: String(required=True, max_length=1000, sanitize=False)
    price: Float(required=True, min_value=0.0)
    category_id: Identifier(required=True)
    stock_quantity: Integer(default=0, min_value=0)
    created_at: DateTime(default=utcnow)
    updated_at: DateTime(default=utcnow)

    @classmethod
    def create(cls, name, description, price, category_id, stock_quantity):
        from stockroom.product.events import ProductCreated

        _validate_details(name, description, price, stock_quantity)

        now = utcnow()
        product = cls(
            name=name,
            description=description,
            price=price,
            category_id=category_id,
            stock_quantity=stock_quantity,
            created_at=now,
            updated_at=now,
        )
        product.sku = sku_for(product.id)
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=name,
                category_id=category_id,
                price=price,
                stock_quantity=stock_quantity,
                created_at=now,
            )
        )
        if product.is_low_stock():
            product._raise_low_stock_alert(now)
        return product

    def update(self, name, description, price, category_id, stock_quantity):
        from stockroom.product.events import ProductStockUpdated

        _validate_details(name, description, price, stock_quantity)

        previous_quantity = self.stock_quantity
        was_low_stock = self.is_low_stock()

        self.name = name
        self.description = description
        self.price = price
        self.category_id = category_id
        self.stock_quantity = stock_quantity
        self.updated_at = next_timestamp(self.updated_at)

        if stock_quantity != previous_quantity:
            self.raise_(
                ProductStockUpdated(
                    product_id=self.id,
                    old_quantity=previous_quantity,
                    new_quantity=stock_quantity,
                    is_low_stock=self.is_low_stock(),
                    updated_at=self.updated_at,
                )
            )
            if self.is_low_stock() and not was_low_stock:
                self._raise_low_stock_alert(self.updated_at)

    @property
    def stock(self):
        return StockQuantity(quantity=self.stock_quantity)

    @property
    def unit_price(self):
        return Money(amount=self.price)

    @property
    def stock_value(self):
        return self.unit_price.multiply(self.stock_quantity)

    def is_low_stock(self):
        return self.stock.is_low_stock

    def _raise_low_stock_alert(self, detected_at):
        from stockroom.product.events import LowStockAlert

        self.raise_(
            LowStockAlert(
                product_id=self.id,
                name=self.name,
                current_quantity=self.stock_quantity,
                threshold=LOW_STOCK_THRESHOLD,
                detected_at=detected_at,
            )
        )


def sku_for(product_id):
    """Stock-keeping unit derived from the product id: the prefix plus six hex digits."""
    return f"{SKU_PREFIX}{str(product_id).replace('-', '')[:6].upper()}"


def _validate_details(name, description, price, stock_quantity):
    errors = {}
    if not name or not name.strip():
        errors["name"] = ["Product name cannot be empty"]
    if not description or not description.strip():
        errors["description"] = ["Product description cannot be empty"]
    if price is None or price < 0:
        errors["price"] = ["Product price cannot be negative"]
    if stock_quantity is None or stock_quantity < 0:
        errors["stock_quantity"] = ["Stock quantity cannot be negative"]
    if errors:
        raise ValidationError(errors)
