# storefront/api/routers/admin.py
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from sqlalchemy.orm import Session

from storefront.api.deps import get_order_service, get_storage_client, require_admin
from storefront.data.database import get_db
from storefront.domain.errors import StorageError
from storefront.domain.schemas import (
    CategoryIn,
    CategoryOut,
    CategoryUpdate,
    ImageOut,
    NewsIn,
    NewsOut,
    NewsUpdate,
    OrderOut,
    OrderStatus,
    OrderStatusIn,
    ProductIn,
    ProductOut,
    ProductUpdate,
)
from storefront.services.catalog_service import CatalogService
from storefront.services.news_service import NewsService
from storefront.services.order_service import OrderService
from storefront.services.storage_client import StorageClient

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def get_catalog(db: Session = Depends(get_db), storage: StorageClient = Depends(get_storage_client)) -> CatalogService:
    return CatalogService(db, storage)


def get_news(db: Session = Depends(get_db), storage: StorageClient = Depends(get_storage_client)) -> NewsService:
    return NewsService(db, storage)


# =====================================================
# KATEGORIE
# =====================================================
@router.post("/categories", response_model=CategoryOut, status_code=201)
def create_category(payload: CategoryIn, svc: CatalogService = Depends(get_catalog)):
    try:
        return svc.create_category(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/categories/{category_id}", response_model=CategoryOut)
def update_category(category_id: UUID, payload: CategoryUpdate, svc: CatalogService = Depends(get_catalog)):
    try:
        return svc.update_category(category_id, payload)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/categories/{category_id}", status_code=204)
def delete_category(category_id: UUID, svc: CatalogService = Depends(get_catalog)):
    try:
        svc.delete_category(category_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


# upload przez zwykle def: FastAPI uruchamia je w threadpoolu, storage i baza blokuja
@router.post("/categories/{category_id}/image", response_model=ImageOut)
def upload_category_image(category_id: UUID, file: UploadFile = File(...), svc: CatalogService = Depends(get_catalog)):
    data = file.file.read()
    try:
        return {"url": svc.upload_category_image(category_id, file.filename, data, file.content_type)}
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=502, detail=str(e))


# =====================================================
# PRODUKTY
# =====================================================
@router.post("/products", response_model=ProductOut, status_code=201)
def create_product(payload: ProductIn, svc: CatalogService = Depends(get_catalog)):
    try:
        return svc.create_product(payload)
    except LookupError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/products/{product_id}", response_model=ProductOut)
def update_product(product_id: UUID, payload: ProductUpdate, svc: CatalogService = Depends(get_catalog)):
    try:
        return svc.update_product(product_id, payload)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/products/{product_id}", status_code=204)
def delete_product(product_id: UUID, svc: CatalogService = Depends(get_catalog)):
    try:
        svc.delete_product(product_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/products/{product_id}/images", response_model=ImageOut)
def upload_product_image(product_id: UUID, file: UploadFile = File(...), svc: CatalogService = Depends(get_catalog)):
    data = file.file.read()
    try:
        return {"url": svc.upload_product_image(product_id, file.filename, data, file.content_type)}
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=502, detail=str(e))


# =====================================================
# NEWSY
# =====================================================
@router.post("/news", response_model=NewsOut, status_code=201)
def create_news(payload: NewsIn, svc: NewsService = Depends(get_news)):
    return svc.create_news(payload)


@router.patch("/news/{news_id}", response_model=NewsOut)
def update_news(news_id: UUID, payload: NewsUpdate, svc: NewsService = Depends(get_news)):
    try:
        return svc.update_news(news_id, payload)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/news/{news_id}", status_code=204)
def delete_news(news_id: UUID, svc: NewsService = Depends(get_news)):
    try:
        svc.delete_news(news_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/news/{news_id}/image", response_model=ImageOut)
def upload_news_image(news_id: UUID, file: UploadFile = File(...), svc: NewsService = Depends(get_news)):
    data = file.file.read()
    try:
        return {"url": svc.upload_image(news_id, file.filename, data, file.content_type)}
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=502, detail=str(e))


# =====================================================
# ZAMOWIENIA
# =====================================================
@router.get("/orders", response_model=List[OrderOut])
def list_orders(
    status: OrderStatus | None = Query(None),
    search: str | None = Query(None, min_length=1),
    svc: OrderService = Depends(get_order_service),
):
    return svc.list_orders(status, search)


@router.patch("/orders/{order_id}/status", response_model=OrderOut)
def update_order_status(order_id: UUID, payload: OrderStatusIn, svc: OrderService = Depends(get_order_service)):
    try:
        return svc.update_status(order_id, payload.status)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
