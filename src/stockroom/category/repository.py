"""Repository for the Category aggregate."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from stockroom.category.category import Category
from stockroom.domain import stockroom
from stockroom.product.product import Product
from stockroom.shared.context import checkpoint
from stockroom.shared.exceptions import DuplicateCategoryName
from stockroom.shared.repository import scan


@stockroom.repository(part_of=Category)
class CategoryRepository:
    """Category storage, including the name-uniqueness rule."""

    def get_by_id(self, category_id):
        checkpoint()
        try:
            return self.get(category_id)
        except ObjectNotFoundError:
            return None

    def get_all(self):
        return sorted(scan(self._dao), key=lambda category: category.name.lower())

    def get_by_ids(self, category_ids):
        wanted = {str(category_id) for category_id in category_ids}
        if not wanted:
            return []
        return [category for category in scan(self._dao) if str(category.id) in wanted]

    def find_by_name(self, name):
        matches = scan(self._dao, name=name)
        return matches[0] if matches else None

    def create(self, category):
        self._ensure_unique_name(category)
        self.add(category)
        return category

    def update(self, category):
        self._ensure_unique_name(category)
        self.add(category)
        return category

    def delete(self, category):
        checkpoint()
        self._dao.delete(category)

    def get_product_count_by_category(self):
        """Map each category's name to the number of products referencing it."""
        counts = {}
        for product in scan(current_domain.repository_for(Product)._dao):
            counts[str(product.category_id)] = counts.get(str(product.category_id), 0) + 1

        return {category.name: counts.get(str(category.id), 0) for category in scan(self._dao)}

    def _ensure_unique_name(self, category):
        existing = self.find_by_name(category.name)
        if existing is not None and str(existing.id) != str(category.id):
            raise DuplicateCategoryName(category.name)
