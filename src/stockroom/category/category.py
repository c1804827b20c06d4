"""Category aggregate root for grouping products."""

from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from stockroom.domain import stockroom
from stockroom.shared.clock import next_timestamp, utcnow


@stockroom.aggregate
class Category:
    """A named grouping of products.

    Names are unique across the store; the category repository enforces that
    when a category is created or renamed. Deleting a category leaves its
    products in place.
    """

    name: String(required=True, min_length=3, max_length=100, sanitize=False)
    description: String(required=True, max_length=500, sanitize=False)
    created_at: DateTime(default=utcnow)
    updated_at: DateTime(default=utcnow)

    @classmethod
    def create(cls, name, description):
        _validate_details(name, description)

        now = utcnow()
        return cls(
            name=name,
            description=description,
            created_at=now,
            updated_at=now,
        )

    def update(self, name, description):
        _validate_details(name, description)

        self.name = name
        self.description = description
        self.updated_at = next_timestamp(self.updated_at)


def _validate_details(name, description):
    errors = {}
    if not name or not name.strip():
        errors["name"] = ["Category name cannot be empty"]
    if not description or not description.strip():
        errors["description"] = ["Category description cannot be empty"]
    if errors:
        raise ValidationError(errors)
