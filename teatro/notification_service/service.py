"""
Notification Service - уведомления пользователей

- Создаются системными действиями (покупка, отмена, решение по аренде)
- Меняется только флаг read
- Ошибка записи уведомления не должна ломать основную операцию
"""
import logging
from typing import List, Optional

from teatro.errors import BackendError, NotFoundError
from teatro.schemas import Notification, NotificationType
from teatro.stores import TheaterStore

logger = logging.getLogger(__name__)


def notify(
    store: TheaterStore,
    user_id: str,
    title: str,
    message: str,
    type: NotificationType = NotificationType.INFO,
) -> Optional[Notification]:
    """Создать уведомление; ошибки только логируются"""
    try:
        notification = store.create_notification(user_id, title, message, type)
    except BackendError as e:
        logger.warning("[Notification] Could not notify user %s (%s): %s", user_id, title, e)
        return None
    logger.info("[Notification] %s -> user %s", title, user_id)
    return notification


def list_notifications(store: TheaterStore, user_id: str) -> List[Notification]:
    return store.list_notifications(user_id)


def mark_read(store: TheaterStore, user_id: str, notification_id: str) -> None:
    if not store.mark_notification_read(user_id, notification_id):
        raise NotFoundError("Notificação não encontrada")


def mark_all_read(store: TheaterStore, user_id: str) -> int:
    updated = store.mark_all_notifications_read(user_id)
    logger.info("[Notification] %s notifications marked read for user %s", updated, user_id)
    return updated
