"""Translate LinkSafe payloads into domain entities."""

from __future__ import annotations

from logging import getLogger

from sitepass.domain.model import ComplianceRecord, Contractor, ContractorRef, Induction, Worker
from sitepass.domain.time_windows import ensure_utc

from .schema import ContractorPayload, WorkerPayload

log = getLogger(__name__)


def parse_worker(payload: WorkerPayload) -> Worker | None:
    """Return the domain worker, or ``None`` when it has no email to grant access to."""

    if payload.email_address is None:
        log.warning(f"Ignoring LinkSafe worker {payload.worker_id} without an email address")
        return None

    primary = payload.primary_contractor
    return Worker(
        worker_id=payload.worker_id,
        email=payload.email_address,
        first_name=payload.first_name,
        is_compliant=payload.is_compliant,
        inductions=tuple(
            Induction(
                inducted_on=ensure_utc(induction.inducted_on_utc),
                expires_on=ensure_utc(induction.expires_on_utc),
                induction_id=induction.induction_id,
            )
            for induction in payload.inductions
        ),
        primary_contractor=(
            ContractorRef(contractor_id=primary.contractor_id, display_name=primary.display_name)
            if primary is not None
            else None
        ),
    )


def parse_contractor(payload: ContractorPayload) -> Contractor:
    return Contractor(
        contractor_id=payload.contractor_id,
        display_name=payload.display_name,
        is_compliant=payload.is_compliant,
        status=payload.status,
        records=tuple(
            ComplianceRecord(
                expires_on=ensure_utc(record.expires_on_utc),
                record_id=record.record_id,
                record_type=record.record_type,
                description=record.description,
            )
            for record in payload.records
            if record.expires_on_utc is not None
        ),
    )
