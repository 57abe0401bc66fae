# storefront/services/notification_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Customer notifications, processed asynchronously by Celery.
    """

    @staticmethod
    def send_order_notification(user_id: int, order_id: int, order_number: str):
        send_order_notification_task.delay(user_id, order_id, order_number)


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int, order_number: str):
    """
    Order placed notification. Only logged for now; an email/SMS gateway
    would be called from here.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_number} (id {order_id}) received")
    return {"user_id": user_id, "order_id": order_id, "order_number": order_number, "status": "sent"}
