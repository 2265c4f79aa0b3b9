# online_store/services/notification_service.py
from online_store.celery_worker import celery_app
from online_store.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysylania powiadomien o zmianie statusu zamowienia.
    Uzywa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_order_status_notification(user_id: int, cart_id: int, status: str) -> None:
        # zmiana statusu jest juz zacommitowana, brak brokera nie moze jej cofnac
        try:
            send_order_status_notification_task.delay(user_id, cart_id, status)
        except Exception as e:
            logger.warning(f"Failed to enqueue notification for order {cart_id}: {e}")


@celery_app.task(name="online_store.services.notification_service.send_order_status_notification_task")
def send_order_status_notification_task(user_id: int, cart_id: int, status: str):
    """
    Celery task - w prawdziwym systemie wyslalby email/SMS/push.
    Teraz tylko loguje.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: Order {cart_id} is now {status}")

    return {"user_id": user_id, "order_id": cart_id, "status": status}
