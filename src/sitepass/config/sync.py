"""Reconciliation run defaults."""

from __future__ import annotations

from dataclasses import dataclass

from sitepass.domain.pagination import DEFAULT_MAX_PAGES, DEFAULT_PAGE_SIZE
from sitepass.domain.rate_limit import DEFAULT_BATCH_DELAY_SECONDS, DEFAULT_BATCH_SIZE

from .env import env_bool, env_float, env_int
from .errors import InvalidConfigurationError


@dataclass(frozen=True, slots=True)
class SyncConfig:
    batch_size: int = DEFAULT_BATCH_SIZE
    batch_delay_seconds: float = DEFAULT_BATCH_DELAY_SECONDS
    page_size: int = DEFAULT_PAGE_SIZE
    max_pages: int = DEFAULT_MAX_PAGES
    include_contractor_expiry: bool = False


def get_sync_config() -> SyncConfig:
    batch_size = env_int("SITEPASS_BATCH_SIZE", DEFAULT_BATCH_SIZE)
    if batch_size < 1:
        raise InvalidConfigurationError("SITEPASS_BATCH_SIZE", str(batch_size), "at least 1")
    batch_delay_seconds = env_float("SITEPASS_BATCH_DELAY_SECONDS", DEFAULT_BATCH_DELAY_SECONDS)
    if batch_delay_seconds < 0:
        raise InvalidConfigurationError(
            "SITEPASS_BATCH_DELAY_SECONDS", str(batch_delay_seconds), "a non-negative number"
        )
    return SyncConfig(
        batch_size=batch_size,
        batch_delay_seconds=batch_delay_seconds,
        include_contractor_expiry=env_bool("SITEPASS_INCLUDE_CONTRACTOR_EXPIRY", False),  # noqa: FBT003
    )
