"""Plan types shared by the diff and execution stages of a reconciliation run.

The plan is the contract between:
- desired-state computation (eligibility over Source workers)
- diffing against the grants currently held by the Target
- mutation execution against the Target
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sitepass.domain.eligibility import EligibilityResult
    from sitepass.domain.model import AccessGrant


class GrantAction(StrEnum):
    """Mutation kinds issued against the Target."""

    CREATE = "create"
    DELETE = "delete"
    UPDATE_DELETE = "update-delete"
    UPDATE_CREATE = "update-create"


@dataclass(slots=True)
class DesiredState:
    """Eligibility of every Source worker, keyed by lower-cased email.

    ``excluded_emails`` holds workers whose eligibility could not be computed;
    grants for those emails are left untouched for the run.
    """

    compliant: dict[str, EligibilityResult] = field(
        default_factory=dict[str, "EligibilityResult"]
    )
    non_compliant: dict[str, EligibilityResult] = field(
        default_factory=dict[str, "EligibilityResult"]
    )
    excluded_emails: set[str] = field(default_factory=set[str])

    def add(self, result: EligibilityResult) -> None:
        key = result.email.casefold()
        if result.is_compliant:
            self.compliant.setdefault(key, result)
        else:
            self.non_compliant.setdefault(key, result)

    def exclude(self, email: str) -> None:
        self.excluded_emails.add(email.casefold())


@dataclass(slots=True, frozen=True)
class GrantUpdate:
    """A drifted grant paired with the eligibility that should replace it."""

    existing: AccessGrant
    desired: EligibilityResult


@dataclass(slots=True)
class ReconciliationPlan:
    to_create: list[EligibilityResult] = field(default_factory=list["EligibilityResult"])
    to_update: list[GrantUpdate] = field(default_factory=list[GrantUpdate])
    to_delete: list[AccessGrant] = field(default_factory=list["AccessGrant"])

    @property
    def is_empty(self) -> bool:
        return not (self.to_create or self.to_update or self.to_delete)


@dataclass(slots=True, frozen=True)
class ReconciliationResult:
    """Counts of mutations that were actually applied during a run."""

    added: int = 0
    updated: int = 0
    deleted: int = 0
    failed: int = 0

    def summary(self) -> str:
        return (
            f"Removed: {self.deleted} workers. Added {self.added} workers. "
            f"Updated {self.updated} workers."
        )


__all__ = [
    "DesiredState",
    "GrantAction",
    "GrantUpdate",
    "ReconciliationPlan",
    "ReconciliationResult",
]
