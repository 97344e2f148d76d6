"""Port for reading workforce compliance data from the Source platform."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sitepass.domain.model import Contractor, Worker


@runtime_checkable
class SourceRepository(Protocol):
    """Read-only access to workers and contractors."""

    async def list_workers(self) -> list[Worker]: ...

    async def list_contractors(self) -> list[Contractor]: ...

    async def list_workers_matched_to_contractors(self) -> list[Worker]:
        """Return every worker with ``contractor`` populated where a match exists."""
        ...


__all__ = ["SourceRepository"]
