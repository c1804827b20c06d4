"""Repository for the Product aggregate."""

from protean.exceptions import ObjectNotFoundError

from stockroom.domain import stockroom
from stockroom.product.product import Product
from stockroom.shared.context import checkpoint
from stockroom.shared.money import Money
from stockroom.shared.repository import newest_first, paginate, scan


@stockroom.repository(part_of=Product)
class ProductRepository:
    """Product storage plus the aggregate reads behind the dashboard."""

    def get_by_id(self, product_id):
        checkpoint()
        try:
            return self.get(product_id)
        except ObjectNotFoundError:
            return None

    def get_all(self, page, page_size, category_id=None):
        """Return one page of products, newest first, and the total match count."""
        products = self._matching(category_id)
        return paginate(newest_first(products), page, page_size), len(products)

    def search_by_name(self, term):
        needle = term.casefold()
        return [product for product in scan(self._dao) if needle in product.name.casefold()]

    def get_by_category_id(self, category_id):
        return self._matching(category_id)

    def get_low_stock(self):
        return [product for product in scan(self._dao) if product.is_low_stock()]

    def get_recent(self, count):
        return newest_first(scan(self._dao), count)

    def get_total_count(self):
        return len(scan(self._dao))

    def get_total_stock_value(self):
        total = Money.zero()
        for product in scan(self._dao):
            total = total.add(product.stock_value)
        return total

    def create(self, product):
        self.add(product)
        return product

    def update(self, product):
        self.add(product)
        return product

    def delete(self, product):
        checkpoint()
        self._dao.delete(product)

    def _matching(self, category_id):
        if category_id:
            return scan(self._dao, category_id=str(category_id))
        return scan(self._dao)
