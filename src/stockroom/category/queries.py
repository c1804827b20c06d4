"""Category read side."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from pydantic import BaseModel, ConfigDict

from stockroom.cache.query_cache import CATEGORY_PREFIX, cache_key, get_query_cache
from stockroom.category.category import Category
from stockroom.shared.dto import CategoryDTO


class GetAllCategories(BaseModel):
    model_config = ConfigDict(frozen=True)


class GetCategoryById(BaseModel):
    model_config = ConfigDict(frozen=True)

    category_id: str | None = None


def get_all_categories(query):
    def load():
        categories = current_domain.repository_for(Category).get_all()
        return [CategoryDTO.from_category(category) for category in categories]

    return get_query_cache().get_or_load(cache_key(CATEGORY_PREFIX, query), list[CategoryDTO], load)


def get_category_by_id(query):
    category = current_domain.repository_for(Category).get_by_id(query.category_id)
    if category is None:
        raise ObjectNotFoundError({"_entity": [f"Category with id {query.category_id} not found"]})
    return CategoryDTO.from_category(category)
