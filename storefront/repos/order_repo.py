# storefront/repos/order_repo.py
from typing import List
from uuid import UUID

from sqlalchemy import select, or_, cast, String
from sqlalchemy.orm import Session, selectinload

from storefront.data.migrations import require_schema
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel


class OrderRepo:
    """
    create_order / add_items tylko flushuja, commit robi serwis,
    wiec naglowek i pozycje zamowienia ida w jednej transakcji.
    """

    def __init__(self, db: Session):
        self.db = db

    def ensure_schema_ready(self) -> None:
        require_schema(self.db)

    def create_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def add_items(self, items: List[OrderItemModel]) -> List[OrderItemModel]:
        self.db.add_all(items)
        self.db.flush()
        return items

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    def get_order(self, order_id: UUID) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .where(OrderModel.id == order_id)
        ).scalar_one_or_none()

    def list_user_orders(self, user_id: UUID) -> List[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .options(selectinload(OrderModel.items))
                .where(OrderModel.user_id == user_id)
                .order_by(OrderModel.created_at.desc())
            ).scalars().all()
        )

    def list_orders(self, status: str | None = None, search: str | None = None) -> List[OrderModel]:
        query = select(OrderModel).options(selectinload(OrderModel.items))

        if status:
            query = query.where(OrderModel.status == status)

        if search:
            pattern = f"%{search.lower()}%"
            query = query.where(
                or_(
                    OrderModel.full_name.ilike(pattern),
                    OrderModel.phone.ilike(pattern),
                    OrderModel.shipping_address.ilike(pattern),
                    OrderModel.email.ilike(pattern),
                    cast(OrderModel.id, String).ilike(pattern),
                )
            )

        return list(self.db.execute(query.order_by(OrderModel.created_at.desc())).scalars().all())

    def update_order_status(self, order_id: UUID, status: str) -> OrderModel | None:
        order = self.get_order(order_id)
        if order:
            order.status = status
            self.db.commit()
            self.db.refresh(order)
        return order
