"""Declarative request rules.

Each request type has a pydantic ``Rules`` model whose field constraints state
what a valid request looks like. ``Rules.check`` reads the request's
attributes, validates them, and returns violations grouped by field instead of
raising, so the dispatcher can merge the output of every validator registered
for a request type and raise a single ``ValidationError``.
"""

from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StringConstraints
from pydantic import ValidationError as RulesViolated

MAX_PAGE_SIZE = 100


def _as_text(value):
    return value if value is None or isinstance(value, str) else str(value)


def trimmed(min_length=1, max_length=None):
    """A required string, measured after surrounding whitespace is stripped."""
    return Annotated[
        str,
        BeforeValidator(_as_text),
        StringConstraints(strip_whitespace=True, min_length=min_length, max_length=max_length),
    ]


Reference = trimmed()


def group_errors(errors):
    """Group pydantic error entries by the field they concern."""
    grouped = {}
    for error in errors:
        field = str(error["loc"][-1]) if error.get("loc") else "_request"
        grouped.setdefault(field, []).append(error["msg"])
    return grouped


class Rules(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def check(cls, request):
        try:
            cls.model_validate(request)
        except RulesViolated as exc:
            return group_errors(exc.errors())
        return {}


def merge_violations(results):
    """Merge several validator outputs into one field-grouped mapping."""
    merged = {}
    for result in results:
        for field, messages in (result or {}).items():
            merged.setdefault(field, []).extend(messages)
    return merged


class PaginationRules(Rules):
    page: int = Field(gt=0)
    page_size: int = Field(gt=0, le=MAX_PAGE_SIZE)


class CategoryReference(Rules):
    category_id: Reference


class ProductReference(Rules):
    product_id: Reference


validate_pagination = PaginationRules.check
validate_category_id = CategoryReference.check
validate_product_id = ProductReference.check
