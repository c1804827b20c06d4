"""Money value object for monetary amounts with currency."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Float, String

from stockroom.domain import stockroom
from stockroom.shared.exceptions import CurrencyMismatchError

# Store prices carry no currency of their own; all arithmetic happens in this one.
DEFAULT_CURRENCY = "BRL"

VALID_CURRENCIES = frozenset(
    {
        "BRL",
        "USD",
        "EUR",
        "GBP",
        "JPY",
        "CAD",
        "AUD",
        "CHF",
        "CNY",
        "INR",
        "MXN",
        "ARS",
        "CLP",
        "COP",
    }
)


@stockroom.value_object
class Money:
    """Value object representing a non-negative monetary amount with currency."""

    amount: Float(required=True, min_value=0.0)
    currency: String(max_length=3, default=DEFAULT_CURRENCY)

    @invariant.post
    def currency_must_be_valid_iso_4217(self):
        if self.currency not in VALID_CURRENCIES:
            raise ValidationError({"currency": [f"Unsupported currency: {self.currency}"]})

    @classmethod
    def zero(cls, currency=DEFAULT_CURRENCY):
        return cls(amount=0.0, currency=currency)

    def add(self, other):
        self._ensure_same_currency(other, "add")
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def subtract(self, other):
        self._ensure_same_currency(other, "subtract")
        return Money(amount=self.amount - other.amount, currency=self.currency)

    def multiply(self, quantity):
        return Money(amount=self.amount * quantity, currency=self.currency)

    def _ensure_same_currency(self, other, operation):
        if self.currency != other.currency:
            raise CurrencyMismatchError(
                {"currency": [f"Cannot {operation} money in different currencies ({self.currency}, {other.currency})"]}
            )

    def __str__(self):
        return f"{self.currency} {self.amount:,.2f}"
