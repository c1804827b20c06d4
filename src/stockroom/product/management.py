"""Product management: commands and handlers."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier, Integer, Text
from protean.utils.globals import current_domain

from stockroom.audit.recorder import record
from stockroom.category.category import Category
from stockroom.domain import stockroom
from stockroom.product.product import Product
from stockroom.shared.context import checkpoint
from stockroom.shared.dto import DeletedDTO, ProductDTO
from stockroom.shared.money import Money

logger = structlog.get_logger(__name__)


# Field rules live in stockroom.product.validation so that every violation is
# reported together; the commands only carry the values.
@stockroom.command(part_of="Product")
class CreateProduct:
    name: Text(sanitize=False)
    description: Text(sanitize=False)
    price: Float()
    category_id: Identifier()
    stock_quantity: Integer(default=0)


@stockroom.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier()
    name: Text(sanitize=False)
    description: Text(sanitize=False)
    price: Float()
    category_id: Identifier()
    stock_quantity: Integer(default=0)


@stockroom.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier()


def load_product(product_id):
    product = current_domain.repository_for(Product).get_by_id(product_id)
    if product is None:
        raise ObjectNotFoundError({"_entity": [f"Product with id {product_id} not found"]})
    return product


def product_dto(product):
    """Map a product to its DTO, resolving the owning category's name."""
    category = current_domain.repository_for(Category).get_by_id(product.category_id)
    return ProductDTO.from_product(product, category.name if category else None)


@stockroom.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            category_id=command.category_id,
            stock_quantity=command.stock_quantity,
        )
        checkpoint()
        current_domain.repository_for(Product).create(product)
        logger.info("Product created", product_id=str(product.id), name=product.name)
        return product_dto(product)

    @handle(UpdateProduct)
    def update_product(self, command):
        product = load_product(command.product_id)
        product.update(
            name=command.name,
            description=command.description,
            price=command.price,
            category_id=command.category_id,
            stock_quantity=command.stock_quantity,
        )
        checkpoint()
        current_domain.repository_for(Product).update(product)
        logger.info("Product updated", product_id=str(product.id), stock_quantity=product.stock_quantity)
        return product_dto(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        product = load_product(command.product_id)
        current_domain.repository_for(Product).delete(product)
        logger.info("Product deleted", product_id=str(product.id))
        return DeletedDTO(id=str(product.id), name=product.name)


# Audit entries are written by the dispatcher once the command's unit of work
# has committed, so a failed audit write cannot roll the change back.
def audit_product_created(command, product):
    details = f"Created product with price {Money(amount=product.price)}"
    record("Create", "Product", product.id, entity_name=product.name, details=details)


def audit_product_updated(command, product):
    record("Update", "Product", product.id, entity_name=product.name, details="Updated product")


def audit_product_deleted(command, deleted):
    record("Delete", "Product", deleted.id, entity_name=deleted.name, details="Product deleted")
