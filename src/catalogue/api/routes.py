"""FastAPI endpoints for the Catalogue domain."""

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError

from catalogue.api.schemas import MessageResponse, ProductListResponse, ProductResponse
from catalogue.product.seed import SEED_PRODUCTS
from identity.api.deps import admin_user
from identity.session import Identity
from ordering.cart.pricing import effective_unit_price
from shared.store import DocumentStoreError, get_document_store
from shared.store.records import ProductFilter, ProductRecord

logger = structlog.get_logger(__name__)

product_router = APIRouter(prefix="/products", tags=["products"])
sync_router = APIRouter(prefix="/api", tags=["catalogue-admin"])


def _product_response(product: ProductRecord) -> ProductResponse:
    return ProductResponse(
        id=product.id,
        name=product.name,
        price=product.price,
        effective_price=effective_unit_price(product.price, product.discount),
        category=product.category,
        description=product.description,
        image=product.image,
        stock=product.stock,
        discount=product.discount,
        rating=product.rating,
        featured=product.featured,
    )


# --- Product endpoints ---


@product_router.get("", response_model=ProductListResponse)
def list_products(
    category: str | None = None,
    featured: bool | None = None,
    search: str | None = None,
) -> ProductListResponse:
    product_filter = ProductFilter(category=category, featured=featured, search=search)
    products = [_product_response(p) for p in get_document_store().list_products(product_filter)]
    return ProductListResponse(products=products, count=len(products))


@product_router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: str) -> ProductResponse:
    product = get_document_store().get_product(product_id)
    if product is None or not product.is_active:
        raise ObjectNotFoundError(f"Product with id {product_id} does not exist")
    return _product_response(product)


# --- Admin sync ---


@sync_router.post("/sync-products", response_model=MessageResponse)
def sync_products(admin: Identity = Depends(admin_user)):
    """Replace the whole catalogue with the seed list."""
    try:
        count = get_document_store().replace_products(SEED_PRODUCTS)
    except DocumentStoreError as exc:
        logger.error("Product sync failed", error=str(exc), requested_by=admin.user_id)
        return JSONResponse(status_code=500, content={"message": "Failed to sync products"})

    logger.info("Products synced", count=count, requested_by=admin.user_id)
    return MessageResponse(message=f"Successfully synced {count} products")
