"""Build resilient clients backed by ``httpx.MockTransport``."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from sitepass.adapters.http_resilience import ResilientClient

if TYPE_CHECKING:
    from collections.abc import Callable

    from sitepass.config import ResilienceConfig


def make_mock_client(
    resilience: ResilienceConfig,
    handler: Callable[[httpx.Request], httpx.Response],
) -> ResilientClient:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    client = ResilientClient(resilience)
    client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        base_url=resilience.base_url or "",
        headers=dict(resilience.default_headers or {}),
        transport=httpx.MockTransport(async_handler),
    )
    return client
