"""FastAPI endpoints for the Stockroom domain.

Every endpoint builds a typed request object and hands it to the dispatcher
together with the caller's identity.
"""

from fastapi import APIRouter, Depends, Header

from stockroom.api.schemas import CategoryRequest, ProductPageResponse, ProductRequest
from stockroom.category.management import CreateCategory, DeleteCategory, UpdateCategory
from stockroom.category.queries import GetAllCategories, GetCategoryById
from stockroom.dashboard.queries import DEFAULT_RECENT_COUNT, GetDashboard, GetRecentAuditLogs, GetRecentProducts
from stockroom.product.management import CreateProduct, DeleteProduct, UpdateProduct
from stockroom.product.queries import (
    GetAllProducts,
    GetLowStockProducts,
    GetProductById,
    GetProductsByCategory,
    SearchProductsByName,
)
from stockroom.registry import dispatcher
from stockroom.shared.context import CurrentUser
from stockroom.shared.dto import (
    AuditLogDTO,
    CategoryDTO,
    DashboardDTO,
    DeletedDTO,
    ProductDTO,
    RecentProductDTO,
)

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])
dashboard_router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def current_user(
    x_user_id: str | None = Header(None),
    x_username: str | None = Header(None),
) -> CurrentUser:
    """Identity forwarded by the authenticating gateway; absent headers mean anonymous."""
    if not x_user_id:
        return CurrentUser.anonymous()
    return CurrentUser(user_id=x_user_id, username=x_username or x_user_id, is_authenticated=True)


# --- Product endpoints ---


@product_router.get("", response_model=ProductPageResponse)
async def list_products(
    page: int = 1,
    page_size: int = 10,
    category_id: str | None = None,
    user: CurrentUser = Depends(current_user),
) -> ProductPageResponse:
    query = GetAllProducts(page=page, page_size=page_size, category_id=category_id)
    return ProductPageResponse.from_page(dispatcher.dispatch(query, user=user))


@product_router.get("/search", response_model=list[ProductDTO])
async def search_products(term: str | None = None, user: CurrentUser = Depends(current_user)) -> list[ProductDTO]:
    return dispatcher.dispatch(SearchProductsByName(term=term), user=user)


@product_router.get("/low-stock", response_model=list[ProductDTO])
async def low_stock_products(user: CurrentUser = Depends(current_user)) -> list[ProductDTO]:
    return dispatcher.dispatch(GetLowStockProducts(), user=user)


@product_router.get("/by-category/{category_id}", response_model=list[ProductDTO])
async def products_by_category(category_id: str, user: CurrentUser = Depends(current_user)) -> list[ProductDTO]:
    return dispatcher.dispatch(GetProductsByCategory(category_id=category_id), user=user)


@product_router.get("/{product_id}", response_model=ProductDTO)
async def get_product(product_id: str, user: CurrentUser = Depends(current_user)) -> ProductDTO:
    return dispatcher.dispatch(GetProductById(product_id=product_id), user=user)


@product_router.post("", status_code=201, response_model=ProductDTO)
async def create_product(body: ProductRequest, user: CurrentUser = Depends(current_user)) -> ProductDTO:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        category_id=body.category_id,
        stock_quantity=body.stock_quantity,
    )
    return dispatcher.dispatch(command, user=user)


@product_router.put("/{product_id}", response_model=ProductDTO)
async def update_product(
    product_id: str,
    body: ProductRequest,
    user: CurrentUser = Depends(current_user),
) -> ProductDTO:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        category_id=body.category_id,
        stock_quantity=body.stock_quantity,
    )
    return dispatcher.dispatch(command, user=user)


@product_router.delete("/{product_id}", response_model=DeletedDTO)
async def delete_product(product_id: str, user: CurrentUser = Depends(current_user)) -> DeletedDTO:
    return dispatcher.dispatch(DeleteProduct(product_id=product_id), user=user)


# --- Category endpoints ---


@category_router.get("", response_model=list[CategoryDTO])
async def list_categories(user: CurrentUser = Depends(current_user)) -> list[CategoryDTO]:
    return dispatcher.dispatch(GetAllCategories(), user=user)


@category_router.get("/{category_id}", response_model=CategoryDTO)
async def get_category(category_id: str, user: CurrentUser = Depends(current_user)) -> CategoryDTO:
    return dispatcher.dispatch(GetCategoryById(category_id=category_id), user=user)


@category_router.post("", status_code=201, response_model=CategoryDTO)
async def create_category(body: CategoryRequest, user: CurrentUser = Depends(current_user)) -> CategoryDTO:
    command = CreateCategory(name=body.name, description=body.description)
    return dispatcher.dispatch(command, user=user)


@category_router.put("/{category_id}", response_model=CategoryDTO)
async def update_category(
    category_id: str,
    body: CategoryRequest,
    user: CurrentUser = Depends(current_user),
) -> CategoryDTO:
    command = UpdateCategory(category_id=category_id, name=body.name, description=body.description)
    return dispatcher.dispatch(command, user=user)


@category_router.delete("/{category_id}", response_model=DeletedDTO)
async def delete_category(category_id: str, user: CurrentUser = Depends(current_user)) -> DeletedDTO:
    return dispatcher.dispatch(DeleteCategory(category_id=category_id), user=user)


# --- Dashboard endpoints ---


@dashboard_router.get("", response_model=DashboardDTO)
async def dashboard(user: CurrentUser = Depends(current_user)) -> DashboardDTO:
    return dispatcher.dispatch(GetDashboard(), user=user)


@dashboard_router.get("/recent-products", response_model=list[RecentProductDTO])
async def recent_products(
    count: int = DEFAULT_RECENT_COUNT,
    user: CurrentUser = Depends(current_user),
) -> list[RecentProductDTO]:
    return dispatcher.dispatch(GetRecentProducts(count=count), user=user)


@dashboard_router.get("/recent-activity", response_model=list[AuditLogDTO])
async def recent_activity(
    count: int = DEFAULT_RECENT_COUNT,
    user: CurrentUser = Depends(current_user),
) -> list[AuditLogDTO]:
    return dispatcher.dispatch(GetRecentAuditLogs(count=count), user=user)
