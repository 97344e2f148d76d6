"""Error sink that buffers failure messages and delivers them as one notification."""

from __future__ import annotations

import smtplib
import threading
from dataclasses import dataclass
from email.message import EmailMessage
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from sitepass.domain.ports import ErrorSink
from sitepass.domain.time_windows import utcnow

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime
    from types import TracebackType

    from sitepass.config.notify import EmailConfig
    from sitepass.domain.time_windows import Clock

log = getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ErrorEntry:
    timestamp: datetime
    message: str


class Notifier(Protocol):
    def __call__(self, entries: Sequence[ErrorEntry]) -> None: ...


class ErrorLog:
    """Thread-safe, append-only error buffer.

    ``flush`` hands every buffered entry to the notifier in a single call and
    clears the buffer. Leaving the context manager flushes whatever remains.
    """

    def __init__(self, notifier: Notifier, *, clock: Clock = utcnow) -> None:
        self._notifier = notifier
        self._clock = clock
        self._entries: list[ErrorEntry] = []
        self._lock = threading.Lock()

    def __enter__(self) -> ErrorLog:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.flush()

    @property
    def entries(self) -> tuple[ErrorEntry, ...]:
        with self._lock:
            return tuple(self._entries)

    def record(self, message: str, timestamp: datetime | None = None) -> None:
        entry = ErrorEntry(timestamp=timestamp or self._clock(), message=message)
        with self._lock:
            self._entries.append(entry)

    def flush(self) -> None:
        with self._lock:
            pending = list(self._entries)
            self._entries.clear()
        if not pending:
            return
        try:
            self._notifier(pending)
        except Exception:
            log.exception("Failed to deliver %s error messages; keeping them", len(pending))
            with self._lock:
                self._entries[:0] = pending


class SmtpNotifier:
    """Send buffered errors as one email over SMTP with STARTTLS."""

    def __init__(self, config: EmailConfig) -> None:
        self._config = config

    def __call__(self, entries: Sequence[ErrorEntry]) -> None:
        message = build_error_email(self._config, entries)
        with smtplib.SMTP(self._config.smtp_host, self._config.port, timeout=30) as smtp:
            smtp.starttls()
            smtp.login(self._config.username, self._config.password)
            smtp.send_message(message)
        log.info("Sent error notification with %s messages", len(entries))


class LoggingNotifier:
    """Fallback notifier used when no SMTP settings are configured."""

    def __call__(self, entries: Sequence[ErrorEntry]) -> None:
        for entry in entries:
            log.error("%s %s", entry.timestamp.isoformat(), entry.message)


def build_error_email(config: EmailConfig, entries: Sequence[ErrorEntry]) -> EmailMessage:
    message = EmailMessage()
    message["Subject"] = config.subject
    message["From"] = config.sender
    message["To"] = ", ".join(config.recipients)
    message.set_content("\n".join(entry.message for entry in entries))
    return message


if TYPE_CHECKING:
    _sink_check: ErrorSink = ErrorLog(LoggingNotifier())


__all__ = [
    "ErrorEntry",
    "ErrorLog",
    "LoggingNotifier",
    "Notifier",
    "SmtpNotifier",
    "build_error_email",
]
