"""Eligibility window computation for a single worker.

A worker is eligible for a grant from the start of their earliest induction that
has not yet expired until the furthest-future expiry among all of their
inductions, provided both the worker and their contractor are compliant and
today falls inside that window.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sitepass.domain.model import GrantRequest, identity_segment
from sitepass.domain.time_windows import utc_date

if TYPE_CHECKING:
    from datetime import date, datetime

    from sitepass.domain.model import Contractor, Worker

LABEL_DATE_FORMAT = "%Y-%m-%d"


class WorkerPreconditionError(ValueError):
    """A worker cannot be evaluated; the run skips it instead of aborting."""

    def __init__(
        self,
        message: str,
        *,
        worker_id: int | None = None,
        email: str | None = None,
    ) -> None:
        super().__init__(message)
        self.worker_id = worker_id
        self.email = email


class MissingWorkerError(WorkerPreconditionError):
    def __init__(self) -> None:
        super().__init__("worker must not be None")


class MissingContractorError(WorkerPreconditionError):
    """Raised when a worker could not be matched to a Source contractor."""

    def __init__(self, worker: Worker) -> None:
        super().__init__(
            f"The worker {worker.email} does not contain a contractor",
            worker_id=worker.worker_id,
            email=worker.email,
        )


@dataclass(slots=True, frozen=True)
class EligibilityResult:
    """Computed eligibility of one worker. Recomputed every run, never persisted."""

    email: str
    valid_from: datetime | None
    valid_to: datetime | None
    is_compliant: bool
    display_label: str = ""
    worker: Worker | None = None

    @property
    def identity_segment(self) -> str:
        return identity_segment(self.display_label)

    def to_grant_request(self, group_id: int) -> GrantRequest:
        return GrantRequest(
            email=self.email,
            name=self.display_label,
            group_id=group_id,
            valid_from=self.valid_from,
            valid_until=self.valid_to,
        )


def compute_eligibility(
    worker: Worker | None,
    *,
    name_prefix: str,
    now: datetime,
    include_contractor_expiry: bool = False,
) -> EligibilityResult:
    """Compute the eligibility window, compliance flag and label for ``worker``.

    Raises ``MissingWorkerError`` when ``worker`` is ``None`` and ``MissingContractorError``
    when the worker has no matched contractor.
    """

    if worker is None:
        raise MissingWorkerError
    contractor = worker.contractor
    if contractor is None:
        raise MissingContractorError(worker)

    today = utc_date(now)

    valid_from = _earliest_open_induction_start(worker, today=today)
    valid_to = _latest_induction_expiry(worker)
    contractor_expiry = _latest_record_expiry(contractor)

    if valid_from is None or valid_to is None or contractor_expiry is None:
        return EligibilityResult(
            email=worker.email,
            valid_from=None,
            valid_to=None,
            is_compliant=False,
            worker=worker,
        )

    if include_contractor_expiry and contractor_expiry < valid_to:
        valid_to = contractor_expiry

    is_compliant = (
        worker.is_compliant
        and contractor.is_compliant
        and utc_date(valid_to) >= today
        and utc_date(valid_from) <= today
    )
    return EligibilityResult(
        email=worker.email,
        valid_from=valid_from,
        valid_to=valid_to,
        is_compliant=is_compliant,
        display_label=worker_grant_label(
            prefix=name_prefix,
            first_name=worker.first_name,
            contractor_name=worker.contractor_name,
            email=worker.email,
            valid_from=valid_from,
            valid_to=valid_to,
        ),
        worker=worker,
    )


def worker_grant_label(
    *,
    prefix: str,
    first_name: str,
    contractor_name: str,
    email: str,
    valid_from: datetime | None = None,
    valid_to: datetime | None = None,
) -> str:
    """Label for grants backed by a worker; only the dates after the colon change."""

    start = valid_from.strftime(LABEL_DATE_FORMAT) if valid_from else ""
    end = valid_to.strftime(LABEL_DATE_FORMAT) if valid_to else ""
    return f"{prefix} {first_name} {contractor_name} {email}: {start} - {end}"


def simple_grant_label(
    prefix: str,
    email: str,
    valid_from: datetime | None = None,
    valid_until: datetime | None = None,
) -> str:
    """Label for grants created directly for an email address."""

    start = "" if valid_from is None else str(valid_from)
    end = "" if valid_until is None else str(valid_until)
    return f"{prefix} {email}: {start} - {end}"


def _earliest_open_induction_start(worker: Worker, *, today: date) -> datetime | None:
    open_inductions = [
        induction for induction in worker.inductions if utc_date(induction.expires_on) > today
    ]
    if not open_inductions:
        return None
    return min(open_inductions, key=lambda induction: induction.inducted_on).inducted_on


def _latest_induction_expiry(worker: Worker) -> datetime | None:
    if not worker.inductions:
        return None
    return max(induction.expires_on for induction in worker.inductions)


def _latest_record_expiry(contractor: Contractor) -> datetime | None:
    if not contractor.records:
        return None
    return max(record.expires_on for record in contractor.records)


__all__ = [
    "EligibilityResult",
    "MissingContractorError",
    "MissingWorkerError",
    "WorkerPreconditionError",
    "compute_eligibility",
    "simple_grant_label",
    "worker_grant_label",
]
