# storefront/services/order_service.py
from datetime import datetime, timezone
from typing import Any, Dict, List
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel, ORDER_STATUSES
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.cart import CartStore
from storefront.domain.checkout import CheckoutSequencer
from storefront.domain.errors import (
    CheckoutIncompleteError,
    OrderHeaderError,
    OrderItemsError,
    OrderSubmissionError,
)
from storefront.domain.schemas import DeliveryData, PaymentData
from storefront.repos.order_repo import OrderRepo
from storefront.services.notification_service import NotificationService
from storefront.utils.identifiers import new_id, normalize_product_id
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def format_shipping_address(delivery: DeliveryData) -> str:
    if delivery.method == "novaposhta":
        return f"Nova Poshta, {delivery.city}, Branch No. {delivery.post_office}"
    if delivery.method == "ukrposhta":
        address = f"Ukrposhta, {delivery.city}, {delivery.postal_code}"
        if delivery.address:
            address += f", {delivery.address}"
        return address
    if delivery.method == "selfpickup":
        return "Self-pickup"
    return f"{delivery.city}, {delivery.address or ''}"


def order_to_dict(order: OrderModel) -> Dict[str, Any]:
    return {
        "id": order.id,
        "user_id": order.user_id,
        "status": order.status,
        "total": order.total,
        "shipping_address": order.shipping_address,
        "phone": order.phone,
        "full_name": order.full_name,
        "payment_method": order.payment_method,
        "email": order.email,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
        "items": [
            {
                "id": i.id,
                "product_id": i.product_id,
                "product_name": i.product_name,
                "quantity": i.quantity,
                "price": i.price,
            }
            for i in order.items
        ],
    }


class OrderService:
    """
    Serwis odpowiedzialny za domenę zamówień.

    place_order to jedyny wieloetapowy proces w sklepie:
    walidacja lokalna -> naglowek zamowienia -> pozycje -> commit.
    Naglowek i pozycje ida w jednej transakcji, blad pozycji wycofuje tez naglowek.
    """

    def __init__(self, db: Session, repo: OrderRepo | None = None, notification_service: NotificationService | None = None):
        self.db = db
        self.repo = repo or OrderRepo(db)
        self.notification_service = notification_service or NotificationService()

    #commands
    def place_order(
        self,
        cart: CartStore,
        checkout: CheckoutSequencer,
        payment: PaymentData,
        user_id: UUID | None = None,
    ) -> Dict[str, Any]:
        """
        Use Case: złożenie zamówienia z koszyka sesji.

        1. Sprawdza dane checkoutu i koszyk (bez kontaktu z baza)
        2. Sprawdza wersje schematu
        3. Zapisuje naglowek (status pending) i wszystkie pozycje jednym batchem
        4. Po commicie czysci koszyk i resetuje checkout

        Przy bledzie koszyk i checkout zostaja bez zmian, mozna ponowic.
        """
        aggregate = checkout.require_ready_for_payment()

        if len(cart) == 0:
            raise CheckoutIncompleteError("Cart is empty, add products before placing an order")

        invalid = cart.invalid_lines()
        if invalid:
            names = ", ".join(i.product.name for i in invalid)
            raise CheckoutIncompleteError(f"Products without a valid price: {names}")

        personal = aggregate.personal_data
        shipping_address = format_shipping_address(aggregate.delivery_data)
        total = cart.total_price

        self.repo.ensure_schema_ready()

        order_id = new_id()
        now = datetime.now(timezone.utc)
        order = OrderModel(
            id=order_id,
            user_id=user_id,
            status="pending",
            created_at=now,
            updated_at=now,
            total=total,
            shipping_address=shipping_address,
            phone=personal.phone,
            full_name=f"{personal.first_name} {personal.last_name}",
            payment_method=payment.method,
            email=personal.email,
        )

        try:
            self.repo.create_order(order)
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Order {order_id} creation failed: {e}")
            raise OrderHeaderError(f"Failed to create order: {e}") from e

        items: List[OrderItemModel] = [
            OrderItemModel(
                id=new_id(),
                order_id=order_id,
                product_id=normalize_product_id(line.product.id),
                product_name=line.product.name,
                quantity=line.quantity,
                price=line.product.price,
            )
            for line in cart.items
        ]

        order.items = items

        try:
            self.repo.add_items(items)
        except SQLAlchemyError as e:
            # rollback wycofuje tez naglowek, nie zostaje zamowienie bez pozycji
            self.repo.rollback()
            logger.error(f"Adding {len(items)} items to order {order_id} failed, order rolled back: {e}")
            raise OrderItemsError(f"Failed to add items to order: {e}") from e

        try:
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Commit of order {order_id} failed: {e}")
            raise OrderSubmissionError(f"Failed to save order: {e}") from e

        logger.info(
            f"Order {order_id} placed: {len(items)} items, total {total}, "
            f"payment {payment.method}, user {user_id or 'guest'}"
        )

        cart.clear()
        checkout.reset()

        self.notification_service.send_order_placed(str(order_id), personal.email, str(total))

        return order_to_dict(order)

    def update_status(self, order_id: UUID, status: str) -> Dict[str, Any]:
        """Use Case: zmiana statusu przez admina (jedyne pole zmieniane po zapisie)."""
        if status not in ORDER_STATUSES:
            raise ValueError(f"Unknown order status: {status}")

        order = self.repo.update_order_status(order_id, status)
        if not order:
            raise LookupError("Order not found")

        logger.info(f"Order {order_id} status changed to {status}")
        return order_to_dict(order)

    #query
    def get_order(self, order_id: UUID) -> Dict[str, Any]:
        order = self.repo.get_order(order_id)
        if not order:
            raise LookupError("Order not found")
        return order_to_dict(order)

    def list_user_orders(self, user_id: UUID) -> List[Dict[str, Any]]:
        return [order_to_dict(o) for o in self.repo.list_user_orders(user_id)]

    def list_orders(self, status: str | None = None, search: str | None = None) -> List[Dict[str, Any]]:
        if status and status not in ORDER_STATUSES:
            raise ValueError(f"Unknown order status: {status}")
        return [order_to_dict(o) for o in self.repo.list_orders(status, search)]
