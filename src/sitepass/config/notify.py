"""Error notification (email) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_int, env_list, optional_env_var, require_env_vars

DEFAULT_SMTP_PORT = 587
DEFAULT_SENDER = "dev@itm.dev"
ERROR_SUBJECT = "LinkSafe Kisi Synchronisation Error"


@dataclass(frozen=True)
class EmailConfig:
    smtp_host: str
    username: str
    password: str
    recipients: tuple[str, ...]
    port: int = DEFAULT_SMTP_PORT
    sender: str = DEFAULT_SENDER
    subject: str = ERROR_SUBJECT


def get_email_config() -> EmailConfig | None:
    """Return SMTP settings, or ``None`` when error emails are not configured."""

    if optional_env_var("SITEPASS_SMTP_HOST") is None:
        return None
    values = require_env_vars(
        (
            "SITEPASS_SMTP_HOST",
            "SITEPASS_SMTP_USERNAME",
            "SITEPASS_SMTP_PASSWORD",
            "SITEPASS_ERROR_RECIPIENTS",
        )
    )
    return EmailConfig(
        smtp_host=values["SITEPASS_SMTP_HOST"],
        username=values["SITEPASS_SMTP_USERNAME"],
        password=values["SITEPASS_SMTP_PASSWORD"],
        recipients=env_list("SITEPASS_ERROR_RECIPIENTS"),
        port=env_int("SITEPASS_SMTP_PORT", DEFAULT_SMTP_PORT),
        sender=optional_env_var("SITEPASS_ERROR_SENDER") or DEFAULT_SENDER,
    )
