# storefront/services/notification_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysyłania powiadomień.
    Używa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_order_placed(order_id: str, email: str, total: str):
        """
        Powiadomienie o przyjeciu zamowienia. Zamowienie jest juz zapisane,
        wiec blad brokera tylko logujemy.
        """
        try:
            send_order_placed_task.delay(order_id, email, total)
        except Exception as e:
            logger.warning(f"[NOTIFICATION] Could not enqueue notification for order {order_id}: {e}")


@celery_app.task(name="storefront.services.notification_service.send_order_placed_task")
def send_order_placed_task(order_id: str, email: str, total: str):
    """
    Celery task - w prawdziwym systemie wysłałby email/SMS.
    Teraz tylko loguje.
    """
    logger.info(f"[NOTIFICATION] {email}: order {order_id} received, total {total}")

    return {"order_id": order_id, "email": email, "status": "sent"}
