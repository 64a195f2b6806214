"""Attendance confirmation emails.

Nothing in this module raises into the caller: a mail outage is logged and
reported as an unsuccessful NotificationResult.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable

from django.conf import settings
from django.core.mail import send_mail
from django.template.loader import render_to_string

from directory.domain import Event, Identity, NotificationResult
from directory.domain.errors import MailUnavailableError

logger = logging.getLogger(__name__)

SUBJECT_TEMPLATE = "Event Attendance Confirmation: {title}"
TEXT_TEMPLATE = "directory/email/attendance_confirmation.txt"
HTML_TEMPLATE = "directory/email/attendance_confirmation.html"


class NotificationDispatcher:
    """Composes and sends the attendance confirmation email."""

    def __init__(self, from_email: str | None = None) -> None:
        self._from_email = from_email

    def notify_attendance(self, identity: Identity, event: Event) -> NotificationResult:
        if not identity.email:
            logger.warning("No email on identity %s; skipping confirmation", identity.subject_id)
            return NotificationResult(success=False, error="Recipient has no email address")

        context = {
            "email": identity.email,
            "title": event.title,
            "description": event.description,
        }
        try:
            self._send(
                to=identity.email,
                subject=SUBJECT_TEMPLATE.format(title=event.title),
                text=render_to_string(TEXT_TEMPLATE, context),
                html=render_to_string(HTML_TEMPLATE, context),
            )
        except MailUnavailableError as exc:
            logger.error("Failed to send confirmation email for event %s: %s", event.id, exc.message)
            return NotificationResult(success=False, error=exc.message)

        logger.info("Confirmation email sent to %s for event %s", identity.email, event.id)
        return NotificationResult(success=True)

    def _send(self, to: str, subject: str, text: str, html: str) -> None:
        try:
            send_mail(
                subject,
                text,
                self._from_email or settings.DEFAULT_FROM_EMAIL,
                [to],
                html_message=html,
                fail_silently=False,
            )
        except Exception as exc:
            # SMTP, socket and timeout errors all surface here.
            raise MailUnavailableError(f"{type(exc).__name__}: {exc}") from exc


class NotificationQueue:
    """Runs notification jobs off the request path.

    With ``run_async`` off, jobs run inline, which keeps tests deterministic.
    """

    def __init__(self, run_async: bool = True, max_workers: int = 2) -> None:
        self._run_async = run_async
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="notify") if run_async else None

    def submit(self, job: Callable[..., NotificationResult], *args) -> Future:
        if self._executor is not None:
            future = self._executor.submit(job, *args)
            future.add_done_callback(_log_unexpected_failure)
            return future

        done: Future = Future()
        try:
            done.set_result(job(*args))
        except Exception as exc:
            logger.exception("Notification job failed")
            done.set_exception(exc)
        return done


def _log_unexpected_failure(future: Future) -> None:
    exc = future.exception()
    if exc is not None:
        logger.error("Notification job failed: %s", exc, exc_info=exc)
