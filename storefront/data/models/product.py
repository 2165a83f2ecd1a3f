from datetime import datetime, timezone
import uuid

from sqlalchemy import Column, String, Text, DateTime, Numeric, Boolean, ForeignKey, JSON, Uuid
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    category_id = Column(Uuid, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)

    image = Column(String, nullable=True)
    additional_images = Column(JSON, nullable=False, default=list)
    in_stock = Column(Boolean, nullable=False, default=True)
    article_number = Column(String(64), nullable=True)
    # waga, wartosci odzywcze, opakowanie, sklad (ProductDetails), od migracji 3
    details = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    category = relationship("CategoryModel")
