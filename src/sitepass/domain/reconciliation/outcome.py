"""Tagged per-mutation results.

A run distinguishes failures that abort it (Source/Target fetches, which raise)
from failures of a single mutation, which are captured as ``Failed`` values and
reported without stopping the remaining work.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from .plan import GrantAction

log = getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Applied:
    action: GrantAction
    subject: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(slots=True, frozen=True)
class Failed:
    action: GrantAction
    subject: str
    reason: str

    @property
    def ok(self) -> bool:
        return False

    def message(self) -> str:
        return f"Failed to {self.action} grant for {self.subject}: {self.reason}"


type MutationOutcome = Applied | Failed


async def attempt(
    action: GrantAction,
    subject: str,
    operation: Callable[[], Awaitable[object]],
) -> MutationOutcome:
    """Run one mutation, turning an ordinary exception into a ``Failed`` value.

    Cancellation is not an ordinary exception and still propagates.
    """

    try:
        await operation()
    except Exception as exc:  # noqa: BLE001
        log.warning("Mutation %s for %s failed", action, subject, exc_info=True)
        return Failed(action=action, subject=subject, reason=str(exc) or type(exc).__name__)
    return Applied(action=action, subject=subject)


__all__ = ["Applied", "Failed", "MutationOutcome", "attempt"]
