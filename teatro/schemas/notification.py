"""
Схема данных для уведомлений
"""
from enum import Enum

from teatro.schemas.base import CamelModel


class NotificationType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"


class Notification(CamelModel):
    id: str
    title: str
    message: str
    type: NotificationType
    read: bool = False
    date: str
