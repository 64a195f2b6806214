"""Signals decoupling attendance changes from their side effects."""

import logging
from functools import lru_cache

from django.conf import settings
from django.dispatch import Signal, receiver

from directory.services.notification_service import NotificationDispatcher, NotificationQueue

logger = logging.getLogger(__name__)

# Sent with identity, event and already_attending after a successful attend.
attendance_confirmed = Signal()


@lru_cache(maxsize=None)
def get_notification_queue() -> NotificationQueue:
    return NotificationQueue(run_async=settings.DIRECTORY_NOTIFICATIONS_ASYNC)


@lru_cache(maxsize=None)
def get_notification_dispatcher() -> NotificationDispatcher:
    return NotificationDispatcher()


@receiver(attendance_confirmed)
def send_attendance_confirmation(sender, identity, event, already_attending=False, **kwargs):
    """Queue the confirmation email, including for repeat attends."""
    if already_attending:
        logger.info("Re-sending confirmation for event %s to %s", event.id, identity.subject_id)
    get_notification_queue().submit(get_notification_dispatcher().notify_attendance, identity, event)
