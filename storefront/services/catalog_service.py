# storefront/services/catalog_service.py
import re
import time
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from storefront.data.models.category import CategoryModel
from storefront.data.models.product import ProductModel
from storefront.domain.errors import StorageError
from storefront.domain.schemas import CategoryIn, CategoryUpdate, ProductDetails, ProductIn, ProductUpdate
from storefront.repos.catalog_repo import CatalogRepo
from storefront.services.storage_client import StorageClient
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def image_path(filename: str, prefix: str = "") -> str:
    clean = re.sub(r"\s+", "-", (filename or "image").strip())
    clean = re.sub(r"[^A-Za-z0-9._-]", "", clean) or "image"
    return f"{prefix}{int(time.time() * 1000)}-{clean}"


def _details_dict(details: ProductDetails | None) -> dict | None:
    if details is None:
        return None
    return details.model_dump(exclude_none=True)


class CatalogService:
    """Kategorie i produkty: odczyt dla sklepu, CRUD dla admina, obrazy w storage."""

    def __init__(self, db: Session, storage: StorageClient | None = None):
        self.repo = CatalogRepo(db)
        self.storage = storage or StorageClient()

    def _remove_images(self, urls: List[str]) -> None:
        # obraz w storage jest tylko dodatkiem, nie blokuje usuwania rekordu
        try:
            removed = self.storage.remove_urls(urls)
            logger.info(f"Removed {removed} stored images")
        except StorageError as e:
            logger.warning(f"Stored images left behind: {e}")

    # =====================================================
    # KATEGORIE
    # =====================================================
    def list_categories(self) -> List[CategoryModel]:
        return self.repo.list_categories()

    def get_category(self, category_id: UUID) -> CategoryModel:
        category = self.repo.get_category(category_id)
        if not category:
            raise LookupError("Category not found")
        return category

    def create_category(self, payload: CategoryIn) -> CategoryModel:
        if self.repo.get_category_by_name(payload.name):
            raise ValueError(f"Category '{payload.name}' already exists")

        category = self.repo.add(CategoryModel(**payload.model_dump()))
        logger.info(f"Category {category.id} '{category.name}' created")
        return category

    def update_category(self, category_id: UUID, payload: CategoryUpdate) -> CategoryModel:
        category = self.get_category(category_id)
        patch = payload.model_dump(exclude_unset=True)

        if "name" in patch:
            other = self.repo.get_category_by_name(patch["name"])
            if other and other.id != category.id:
                raise ValueError(f"Category '{patch['name']}' already exists")

        return self.repo.update(category, patch)

    def delete_category(self, category_id: UUID) -> None:
        category = self.get_category(category_id)
        image = category.image

        self.repo.delete(category)
        logger.info(f"Category {category_id} deleted")

        if image:
            self._remove_images([image])

    def upload_category_image(self, category_id: UUID, filename: str, data: bytes, content_type: str) -> str:
        category = self.get_category(category_id)
        url = self.storage.upload("categories", image_path(filename), data, content_type)
        self.repo.update(category, {"image": url})
        return url

    # =====================================================
    # PRODUKTY
    # =====================================================
    def list_products(self, category_id: UUID | None = None) -> List[ProductModel]:
        return self.repo.list_products(category_id)

    def get_product(self, product_id: UUID) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise LookupError("Product not found")
        return product

    def create_product(self, payload: ProductIn) -> ProductModel:
        if payload.category_id:
            self.get_category(payload.category_id)

        data = payload.model_dump()
        data["details"] = _details_dict(payload.details)

        product = self.repo.add(ProductModel(**data))
        logger.info(f"Product {product.id} '{product.name}' created")
        return product

    def update_product(self, product_id: UUID, payload: ProductUpdate) -> ProductModel:
        product = self.get_product(product_id)
        patch = payload.model_dump(exclude_unset=True)

        if patch.get("category_id"):
            self.get_category(patch["category_id"])

        if "details" in patch:
            # details zastepowane w calosci, null czysci karte produktu
            patch["details"] = _details_dict(payload.details)

        return self.repo.update(product, patch)

    def delete_product(self, product_id: UUID) -> None:
        product = self.get_product(product_id)
        images = [product.image, *(product.additional_images or [])]

        self.repo.delete(product)
        logger.info(f"Product {product_id} deleted")

        self._remove_images([i for i in images if i])

    def upload_product_image(self, product_id: UUID, filename: str, data: bytes, content_type: str) -> str:
        """Pierwszy obraz zostaje glownym, kolejne trafiaja do additional_images."""
        product = self.get_product(product_id)
        url = self.storage.upload("products", image_path(filename), data, content_type)

        if not product.image:
            self.repo.update(product, {"image": url})
        else:
            self.repo.update(product, {"additional_images": [*(product.additional_images or []), url]})
        return url
