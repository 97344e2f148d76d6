"""Reconciliation of Target access grants against Source compliance.

Flow of one run:
1) load matched workers from the Source and all grants from the Target
2) compute eligibility per worker (desired state)
3) diff desired state against the grants into create/update/delete
4) apply mutations in rate-limited batches, isolating per-item failures
"""

from __future__ import annotations

from .diff import build_desired_state, grant_needs_update, plan_reconciliation
from .engine import ReconciliationEngine, ReconciliationSettings
from .outcome import Applied, Failed, MutationOutcome, attempt
from .plan import (
    DesiredState,
    GrantAction,
    GrantUpdate,
    ReconciliationPlan,
    ReconciliationResult,
)

__all__ = [
    "Applied",
    "DesiredState",
    "Failed",
    "GrantAction",
    "GrantUpdate",
    "MutationOutcome",
    "ReconciliationEngine",
    "ReconciliationPlan",
    "ReconciliationResult",
    "ReconciliationSettings",
    "attempt",
    "build_desired_state",
    "grant_needs_update",
    "plan_reconciliation",
]
