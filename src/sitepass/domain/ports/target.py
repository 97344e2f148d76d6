"""Port for reading and mutating access grants in the Target platform."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sitepass.domain.model import AccessGrant, GrantRequest


@dataclass(slots=True, frozen=True)
class GrantPage:
    """One page of grants plus the paging position reported by the Target.

    ``range_end`` and ``total`` are ``None`` when the Target did not report a
    usable range for this page.
    """

    items: tuple[AccessGrant, ...] = ()
    range_end: int | None = None
    total: int | None = None

    @property
    def is_last(self) -> bool:
        if self.range_end is None or self.total is None:
            return False
        return self.range_end >= self.total


@runtime_checkable
class GrantPageFetcher(Protocol):
    async def __call__(self, offset: int, page_size: int) -> GrantPage: ...


@runtime_checkable
class TargetRepository(Protocol):
    """Grant storage. There is no update primitive: changes are delete + create."""

    async def fetch_grant_page(self, offset: int, page_size: int) -> GrantPage: ...

    async def create_grant(self, request: GrantRequest) -> AccessGrant | None: ...

    async def delete_grant(self, grant_id: int) -> None: ...


__all__ = ["GrantPage", "GrantPageFetcher", "TargetRepository"]
