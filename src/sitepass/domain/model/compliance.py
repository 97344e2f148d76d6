"""Workforce compliance entities reported by the Source platform."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(slots=True, frozen=True)
class Induction:
    """Dated induction/training record with its own validity window."""

    inducted_on: datetime
    expires_on: datetime
    induction_id: int | None = None


@dataclass(slots=True, frozen=True)
class ComplianceRecord:
    """Contractor compliance record (insurance, licences, ...)."""

    expires_on: datetime
    record_id: int | None = None
    record_type: str | None = None
    description: str | None = None


@dataclass(slots=True, frozen=True)
class ContractorRef:
    """The primary contractor as referenced from a worker payload."""

    contractor_id: int
    display_name: str = ""


@dataclass(slots=True, frozen=True)
class Contractor:
    contractor_id: int
    is_compliant: bool
    display_name: str = ""
    status: str | None = None
    records: tuple[ComplianceRecord, ...] = ()


@dataclass(slots=True, frozen=True)
class Worker:
    """Worker identity plus the compliance data eligibility is computed from.

    ``contractor`` is only populated once the worker has been joined against the
    Source's contractor list (see ``sitepass.domain.matching``).
    """

    worker_id: int
    email: str
    first_name: str
    is_compliant: bool
    inductions: tuple[Induction, ...] = ()
    primary_contractor: ContractorRef | None = None
    contractor: Contractor | None = field(default=None, repr=False)

    @property
    def contractor_name(self) -> str:
        if self.primary_contractor is not None and self.primary_contractor.display_name:
            return self.primary_contractor.display_name
        if self.contractor is not None:
            return self.contractor.display_name
        return ""

    def with_contractor(self, contractor: Contractor | None) -> Worker:
        return replace(self, contractor=contractor)
