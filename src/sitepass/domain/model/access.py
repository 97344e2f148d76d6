"""Access grants held by the Target platform."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

LABEL_SEPARATOR = ":"


def identity_segment(label: str | None) -> str:
    """Return the stable part of a grant label (everything before the first colon)."""

    if not label:
        return ""
    return label.split(LABEL_SEPARATOR, 1)[0]


@dataclass(slots=True, frozen=True)
class AccessGrant:
    """A time-bounded access permission (a Kisi group link)."""

    grant_id: int
    email: str | None
    name: str | None = None
    group_id: int | None = None
    valid_from: datetime | None = None
    valid_until: datetime | None = None

    # Metadata carried through but not used for reconciliation
    link_enabled: bool = True
    issued_by_id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_used_at: datetime | None = None

    @property
    def identity_segment(self) -> str:
        return identity_segment(self.name)

    def has_email(self, email: str) -> bool:
        return self.email is not None and self.email.casefold() == email.casefold()


@dataclass(slots=True, frozen=True)
class GrantRequest:
    """Payload for creating a grant in the Target."""

    email: str
    name: str
    group_id: int
    valid_from: datetime | None = None
    valid_until: datetime | None = None
