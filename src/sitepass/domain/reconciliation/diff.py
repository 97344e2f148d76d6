"""Compute desired state and diff it against the grants held by the Target."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from sitepass.domain.eligibility import WorkerPreconditionError, compute_eligibility
from sitepass.domain.time_windows import dates_equal_ignoring_timezone

from .plan import DesiredState, GrantUpdate, ReconciliationPlan

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from sitepass.domain.eligibility import EligibilityResult
    from sitepass.domain.model import AccessGrant, Worker
    from sitepass.domain.ports import ErrorSink

log = getLogger(__name__)


def build_desired_state(
    workers: Iterable[Worker | None],
    *,
    name_prefix: str,
    now: datetime,
    error_sink: ErrorSink,
    include_contractor_expiry: bool = False,
) -> DesiredState:
    """Compute eligibility for every worker.

    A worker whose eligibility cannot be computed is recorded in ``error_sink``
    and excluded from the run instead of being treated as (non-)compliant.
    """

    desired = DesiredState()
    for worker in workers:
        try:
            result = compute_eligibility(
                worker,
                name_prefix=name_prefix,
                now=now,
                include_contractor_expiry=include_contractor_expiry,
            )
        except WorkerPreconditionError as exc:
            log.warning("Skipping worker %s: %s", exc.worker_id, exc)
            error_sink.record(str(exc))
            if exc.email is not None:
                desired.exclude(exc.email)
            continue
        desired.add(result)
    return desired


def grant_needs_update(grant: AccessGrant, desired: EligibilityResult) -> bool:
    """Return ``True`` when the grant's identity or window drifted from ``desired``."""

    if grant.identity_segment.casefold() != desired.identity_segment.casefold():
        return True
    if not dates_equal_ignoring_timezone(grant.valid_from, desired.valid_from):
        return True
    return not dates_equal_ignoring_timezone(grant.valid_until, desired.valid_to)


def plan_reconciliation(
    desired: DesiredState,
    grants: Iterable[AccessGrant],
    *,
    name_prefix: str,
) -> ReconciliationPlan:
    """Diff ``desired`` against the Target's ``grants``.

    Grants are matched to workers by case-insensitive email; when several grants
    share an email the first one is compared and further ones carrying this
    integration's prefix are removed.
    """

    plan = ReconciliationPlan()
    grants_by_email: dict[str, list[AccessGrant]] = {}
    unowned: list[AccessGrant] = []
    for grant in grants:
        if grant.email is None:
            unowned.append(grant)
            continue
        grants_by_email.setdefault(grant.email.casefold(), []).append(grant)

    for key, result in desired.compliant.items():
        matching = grants_by_email.get(key)
        if not matching:
            plan.to_create.append(result)
            continue
        first, *duplicates = matching
        if grant_needs_update(first, result):
            plan.to_update.append(GrantUpdate(existing=first, desired=result))
        plan.to_delete.extend(
            grant for grant in duplicates if _issued_by_integration(grant, name_prefix)
        )

    for key, matching in grants_by_email.items():
        if key in desired.excluded_emails or key in desired.compliant:
            continue
        if key in desired.non_compliant:
            plan.to_delete.extend(matching)
            continue
        # Worker no longer present in the Source
        plan.to_delete.extend(
            grant for grant in matching if _issued_by_integration(grant, name_prefix)
        )

    if unowned:
        log.debug("Ignoring %s grants without an email", len(unowned))

    return plan


def _issued_by_integration(grant: AccessGrant, name_prefix: str) -> bool:
    if not name_prefix or not grant.name:
        return False
    return grant.name.casefold().startswith(f"{name_prefix} ".casefold())


__all__ = ["build_desired_state", "grant_needs_update", "plan_reconciliation"]
