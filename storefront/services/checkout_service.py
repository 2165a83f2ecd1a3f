# storefront/services/checkout_service.py
from typing import Any, Dict
from uuid import UUID

import redis

from storefront.domain.schemas import DeliveryData, PaymentData, PersonalData
from storefront.services.order_service import OrderService
from storefront.services.session_store import CheckoutSession, SessionStore
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def checkout_to_dict(session: CheckoutSession) -> Dict[str, Any]:
    aggregate = session.checkout.aggregate
    return {
        "session_id": session.session_id,
        "step": session.checkout.step.value,
        "personal_data": aggregate.personal_data,
        "delivery_data": aggregate.delivery_data,
    }


class CheckoutService:
    def __init__(self, store: SessionStore, order_service: OrderService):
        self.store = store
        self.order_service = order_service

    def get_checkout(self, session_id: str) -> Dict[str, Any]:
        return checkout_to_dict(self.store.load(session_id))

    def submit_personal(self, session_id: str, data: PersonalData) -> Dict[str, Any]:
        session = self.store.load(session_id)
        session.checkout.submit_personal(data)
        self.store.save(session)
        return checkout_to_dict(session)

    def submit_delivery(self, session_id: str, data: DeliveryData) -> Dict[str, Any]:
        session = self.store.load(session_id)
        session.checkout.submit_delivery(data)
        self.store.save(session)
        return checkout_to_dict(session)

    def back(self, session_id: str) -> Dict[str, Any]:
        session = self.store.load(session_id)
        session.checkout.back()
        self.store.save(session)
        return checkout_to_dict(session)

    def abandon(self, session_id: str) -> Dict[str, Any]:
        # porzucony checkout: dane formularzy znikaja, koszyk zostaje
        session = self.store.load(session_id)
        session.checkout.reset()
        self.store.save(session)
        return checkout_to_dict(session)

    def pay(self, session_id: str, payment: PaymentData, user_id: UUID | None = None) -> Dict[str, Any]:
        session = self.store.load(session_id)

        # przy bledzie place_order rzuca wyjatek zanim cokolwiek zmieni, sesji nie zapisujemy
        order = self.order_service.place_order(session.cart, session.checkout, payment, user_id)

        # zamowienie jest juz zapisane: blad zapisu sesji tylko logujemy, klient dostaje zamowienie
        try:
            self.store.save(session)
        except redis.RedisError as e:
            logger.error(f"Session {session_id}: order {order['id']} placed, but session was not saved: {e}")
            return order

        logger.info(f"Session {session_id}: checkout finished with order {order['id']}")
        return order
