"""Offset pagination over the Target's grant listing."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from sitepass.domain.model import AccessGrant
    from sitepass.domain.ports.target import GrantPage, GrantPageFetcher

log = getLogger(__name__)

DEFAULT_PAGE_SIZE = 250
DEFAULT_MAX_PAGES = 10


@dataclass(slots=True, frozen=True)
class GrantPages:
    """Lazy, finite sequence of grant pages.

    Every ``async for`` starts again from offset zero. Iteration ends when the
    reported range reaches the total, a page comes back empty, or ``max_pages``
    pages have been read. Without a usable range, paging continues only while
    pages come back full.
    """

    fetch_page: GrantPageFetcher
    page_size: int = DEFAULT_PAGE_SIZE
    max_pages: int = DEFAULT_MAX_PAGES

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be positive")
        if self.max_pages < 1:
            raise ValueError("max_pages must be positive")

    def __aiter__(self) -> AsyncIterator[GrantPage]:
        return self._iter_pages()

    async def _iter_pages(self) -> AsyncIterator[GrantPage]:
        offset = 0
        for page_number in range(1, self.max_pages + 1):
            page = await self.fetch_page(offset, self.page_size)
            yield page

            if not page.items or page.is_last:
                return
            if page.total is None and len(page.items) < self.page_size:
                return
            if page_number == self.max_pages:
                log.warning(
                    "Stopped reading grants after %s pages (range_end=%s, total=%s)",
                    self.max_pages,
                    page.range_end,
                    page.total,
                )
                return
            offset += self.page_size


async def read_all_grants(
    fetch_page: GrantPageFetcher,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
    max_pages: int = DEFAULT_MAX_PAGES,
) -> list[AccessGrant]:
    grants: list[AccessGrant] = []
    async for page in GrantPages(fetch_page, page_size=page_size, max_pages=max_pages):
        grants.extend(page.items)
    return grants


__all__ = ["DEFAULT_MAX_PAGES", "DEFAULT_PAGE_SIZE", "GrantPages", "read_all_grants"]
