# storefront/api/routers/catalog.py
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_storage_client
from storefront.data.database import get_db
from storefront.domain.schemas import CategoryOut, NewsOut, ProductOut
from storefront.services.catalog_service import CatalogService
from storefront.services.news_service import NewsService
from storefront.services.storage_client import StorageClient

router = APIRouter(tags=["catalog"])


@router.get("/categories", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db), storage: StorageClient = Depends(get_storage_client)):
    return CatalogService(db, storage).list_categories()


@router.get("/categories/{category_id}", response_model=CategoryOut)
def get_category(category_id: UUID, db: Session = Depends(get_db), storage: StorageClient = Depends(get_storage_client)):
    try:
        return CatalogService(db, storage).get_category(category_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/categories/{category_id}/products", response_model=List[ProductOut])
def list_category_products(
    category_id: UUID,
    db: Session = Depends(get_db),
    storage: StorageClient = Depends(get_storage_client),
):
    svc = CatalogService(db, storage)
    try:
        svc.get_category(category_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return svc.list_products(category_id)


@router.get("/products", response_model=List[ProductOut])
def list_products(
    category_id: UUID | None = None,
    db: Session = Depends(get_db),
    storage: StorageClient = Depends(get_storage_client),
):
    return CatalogService(db, storage).list_products(category_id)


@router.get("/products/{product_id}", response_model=ProductOut)
def get_product(product_id: UUID, db: Session = Depends(get_db), storage: StorageClient = Depends(get_storage_client)):
    try:
        return CatalogService(db, storage).get_product(product_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/news", response_model=List[NewsOut])
def list_news(db: Session = Depends(get_db), storage: StorageClient = Depends(get_storage_client)):
    return NewsService(db, storage).list_news()


@router.get("/news/{news_id}", response_model=NewsOut)
def get_news(news_id: UUID, db: Session = Depends(get_db), storage: StorageClient = Depends(get_storage_client)):
    try:
        return NewsService(db, storage).get_news(news_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
