"""LinkSafe (Source platform) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

LINKSAFE_BASE_URL = "https://api.linksafe.com.au/"
LINKSAFE_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class LinkSafeConfig:
    """Holds LinkSafe API configuration values."""

    api_token: str
    resilience: ResilienceConfig


def linksafe_resilience(api_token: str, *, base_url: str = LINKSAFE_BASE_URL) -> ResilienceConfig:
    return ResilienceConfig(
        name="linksafe",
        base_url=base_url,
        timeout_seconds=LINKSAFE_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=2, per_seconds=1.0),
        default_headers={"apikey": api_token, "Accept": "application/json"},
    )


def get_linksafe_config(*, resilience: ResilienceConfig | None = None) -> LinkSafeConfig:
    values = require_env_vars(("LINKSAFE_API_TOKEN",))
    api_token = values["LINKSAFE_API_TOKEN"]
    return LinkSafeConfig(
        api_token=api_token,
        resilience=resilience or linksafe_resilience(api_token),
    )
