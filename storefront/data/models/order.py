from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Numeric, Uuid
from sqlalchemy.orm import relationship

from storefront.data.database import Base

ORDER_STATUSES = ("pending", "processing", "completed", "cancelled", "refunded")


class OrderModel(Base):
    __tablename__ = "orders"

    # id generowany po stronie serwisu (uuid4), nie przez baze
    id = Column(Uuid, primary_key=True)
    user_id = Column(Uuid, nullable=True, index=True)  # NULL = zamowienie goscia

    status = Column(String(20), nullable=False, default="pending")  # pending, processing, completed, cancelled, refunded
    total = Column(Numeric(10, 2), nullable=False)
    shipping_address = Column(String, nullable=False)
    phone = Column(String(32), nullable=False)
    full_name = Column(String(200), nullable=False)
    payment_method = Column(String(20), nullable=False)
    email = Column(String(320), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
