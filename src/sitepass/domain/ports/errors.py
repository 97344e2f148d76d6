"""Port for collecting failure messages delivered out of band."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime


@runtime_checkable
class ErrorSink(Protocol):
    """Append-only collector; ``flush`` delivers everything recorded so far."""

    def record(self, message: str, timestamp: datetime | None = None) -> None: ...

    def flush(self) -> None: ...


__all__ = ["ErrorSink"]
