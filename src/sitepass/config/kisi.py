"""Kisi (Target platform) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import parse_int, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

KISI_BASE_URL = "https://api.kisi.io/"
KISI_TIMEOUT_SECONDS = 15.0


@dataclass(frozen=True)
class KisiConfig:
    """Holds Kisi API configuration values.

    ``name_prefix`` starts every grant label created by this integration and is
    how its grants are told apart from manually issued ones. ``group_id`` is the
    access group new grants are created in.
    """

    api_token: str
    group_id: int
    name_prefix: str
    resilience: ResilienceConfig


def kisi_resilience(api_token: str, *, base_url: str = KISI_BASE_URL) -> ResilienceConfig:
    return ResilienceConfig(
        name="kisi",
        base_url=base_url,
        timeout_seconds=KISI_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        default_headers={
            "Authorization": f"KISI-LOGIN {api_token}",
            "Accept": "application/json",
        },
    )


def get_kisi_config(*, resilience: ResilienceConfig | None = None) -> KisiConfig:
    values = require_env_vars(("KISI_API_TOKEN", "KISI_GROUP_ID", "KISI_NAME_PREFIX"))
    api_token = values["KISI_API_TOKEN"]
    return KisiConfig(
        api_token=api_token,
        group_id=parse_int("KISI_GROUP_ID", values["KISI_GROUP_ID"]),
        name_prefix=values["KISI_NAME_PREFIX"],
        resilience=resilience or kisi_resilience(api_token),
    )
