"""Category management: commands and handlers."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from stockroom.audit.recorder import record
from stockroom.category.category import Category
from stockroom.domain import stockroom
from stockroom.shared.context import checkpoint
from stockroom.shared.dto import CategoryDTO, DeletedDTO

logger = structlog.get_logger(__name__)


@stockroom.command(part_of="Category")
class CreateCategory:
    name: Text(sanitize=False)
    description: Text(sanitize=False)


@stockroom.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier()
    name: Text(sanitize=False)
    description: Text(sanitize=False)


@stockroom.command(part_of="Category")
class DeleteCategory:
    category_id: Identifier()


def load_category(category_id):
    category = current_domain.repository_for(Category).get_by_id(category_id)
    if category is None:
        raise ObjectNotFoundError({"_entity": [f"Category with id {category_id} not found"]})
    return category


@stockroom.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        category = Category.create(name=command.name, description=command.description)
        checkpoint()
        current_domain.repository_for(Category).create(category)
        logger.info("Category created", category_id=str(category.id), name=category.name)
        return CategoryDTO.from_category(category)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = load_category(command.category_id)
        category.update(name=command.name, description=command.description)
        checkpoint()
        repo.update(category)
        logger.info("Category updated", category_id=str(category.id), name=category.name)
        return CategoryDTO.from_category(category)

    @handle(DeleteCategory)
    def delete_category(self, command):
        category = load_category(command.category_id)
        current_domain.repository_for(Category).delete(category)
        logger.info("Category deleted", category_id=str(category.id))
        return DeletedDTO(id=str(category.id), name=category.name)


def audit_category_created(command, category):
    record("Create", "Category", category.id, entity_name=category.name, details="Created category")


def audit_category_updated(command, category):
    record("Update", "Category", category.id, entity_name=category.name, details="Updated category")


def audit_category_deleted(command, deleted):
    record("Delete", "Category", deleted.id, entity_name=deleted.name, details="Category deleted")
