# storefront/repos/catalog_repo.py
from typing import Any, Dict, List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.category import CategoryModel
from storefront.data.models.product import ProductModel


class CatalogRepo:
    def __init__(self, db: Session):
        self.db = db

    # kategorie
    def list_categories(self) -> List[CategoryModel]:
        return list(self.db.execute(select(CategoryModel).order_by(CategoryModel.name)).scalars().all())

    def get_category(self, category_id: UUID) -> CategoryModel | None:
        return self.db.get(CategoryModel, category_id)

    def get_category_by_name(self, name: str) -> CategoryModel | None:
        return self.db.execute(
            select(CategoryModel).where(CategoryModel.name == name)
        ).scalar_one_or_none()

    # produkty
    def list_products(self, category_id: UUID | None = None) -> List[ProductModel]:
        query = select(ProductModel)
        if category_id:
            query = query.where(ProductModel.category_id == category_id)
        return list(self.db.execute(query.order_by(ProductModel.name)).scalars().all())

    def get_product(self, product_id: UUID) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    # wspolne
    def add(self, row):
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row

    def update(self, row, patch: Dict[str, Any]):
        for key, value in patch.items():
            setattr(row, key, value)
        self.db.commit()
        self.db.refresh(row)
        return row

    def delete(self, row) -> None:
        self.db.delete(row)
        self.db.commit()
