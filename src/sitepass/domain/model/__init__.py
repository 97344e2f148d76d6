"""Public domain model surface."""

from __future__ import annotations

from sitepass.domain.model.access import AccessGrant, GrantRequest, identity_segment
from sitepass.domain.model.compliance import (
    ComplianceRecord,
    Contractor,
    ContractorRef,
    Induction,
    Worker,
)

__all__ = [
    "AccessGrant",
    "ComplianceRecord",
    "Contractor",
    "ContractorRef",
    "GrantRequest",
    "Induction",
    "Worker",
    "identity_segment",
]
