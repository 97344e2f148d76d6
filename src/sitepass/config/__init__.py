"""Application configuration helpers."""

from __future__ import annotations

from .env import env_bool, env_float, env_int, env_list, optional_env_var, require_env_vars
from .errors import ConfigurationError, InvalidConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .kisi import KisiConfig, get_kisi_config, kisi_resilience
from .linksafe import LinkSafeConfig, get_linksafe_config, linksafe_resilience
from .logging import configure_logging
from .notify import EmailConfig, get_email_config
from .sync import SyncConfig, get_sync_config

__all__ = [
    "ConfigurationError",
    "EmailConfig",
    "InvalidConfigurationError",
    "KisiConfig",
    "LinkSafeConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SyncConfig",
    "configure_logging",
    "env_bool",
    "env_float",
    "env_int",
    "env_list",
    "get_email_config",
    "get_kisi_config",
    "get_linksafe_config",
    "get_sync_config",
    "kisi_resilience",
    "linksafe_resilience",
    "optional_env_var",
    "require_env_vars",
]
