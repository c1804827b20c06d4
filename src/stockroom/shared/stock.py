"""StockQuantity value object and the low-stock rule."""

from protean.exceptions import ValidationError
from protean.fields import Integer

from stockroom.domain import stockroom
from stockroom.shared.exceptions import InsufficientStockError

LOW_STOCK_THRESHOLD = 10


def is_low_stock(quantity):
    return quantity < LOW_STOCK_THRESHOLD


@stockroom.value_object
class StockQuantity:
    """Non-negative count of units on hand."""

    quantity: Integer(default=0, min_value=0)

    @property
    def is_low_stock(self):
        return is_low_stock(self.quantity)

    @property
    def is_out_of_stock(self):
        return self.quantity == 0

    def add(self, quantity):
        if quantity < 0:
            raise ValidationError({"quantity": ["Cannot add a negative quantity"]})
        return StockQuantity(quantity=self.quantity + quantity)

    def subtract(self, quantity):
        if quantity < 0:
            raise ValidationError({"quantity": ["Cannot subtract a negative quantity"]})
        if quantity > self.quantity:
            raise InsufficientStockError(
                {"quantity": [f"Insufficient stock: {self.quantity} on hand, {quantity} requested"]}
            )
        return StockQuantity(quantity=self.quantity - quantity)

    def __int__(self):
        return self.quantity
