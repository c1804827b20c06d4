"""Request rules for category commands."""

from stockroom.shared.validation import Reference, Rules, trimmed


class CreateCategoryRules(Rules):
    name: trimmed(min_length=3, max_length=100)
    description: trimmed(max_length=500)


class UpdateCategoryRules(CreateCategoryRules):
    category_id: Reference


validate_create_category = CreateCategoryRules.check
validate_update_category = UpdateCategoryRules.check
