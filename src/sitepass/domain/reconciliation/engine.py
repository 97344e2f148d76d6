"""Orchestrator for one reconciliation run.

The engine loads the Source workers and the Target grants, diffs the computed
desired state against them and drives the resulting mutations through the
Target port. It does not prescribe concrete adapters, so the same engine runs
against HTTP repositories in production and in-memory fakes in tests.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from sitepass.domain.pagination import DEFAULT_MAX_PAGES, DEFAULT_PAGE_SIZE, read_all_grants
from sitepass.domain.rate_limit import (
    DEFAULT_BATCH_DELAY_SECONDS,
    DEFAULT_BATCH_SIZE,
    run_in_batches,
)
from sitepass.domain.time_windows import utcnow

from .diff import build_desired_state, plan_reconciliation
from .outcome import Failed, attempt
from .plan import GrantAction, ReconciliationResult

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from sitepass.domain.eligibility import EligibilityResult
    from sitepass.domain.model import AccessGrant, Worker
    from sitepass.domain.ports import ErrorSink, SourceRepository, TargetRepository
    from sitepass.domain.rate_limit import Sleep
    from sitepass.domain.time_windows import Clock

    from .outcome import MutationOutcome
    from .plan import ReconciliationPlan

    type MutationUnit = Callable[[], Awaitable[MutationOutcome]]

log = getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ReconciliationSettings:
    name_prefix: str
    group_id: int
    batch_size: int = DEFAULT_BATCH_SIZE
    batch_delay_seconds: float = DEFAULT_BATCH_DELAY_SECONDS
    page_size: int = DEFAULT_PAGE_SIZE
    max_pages: int = DEFAULT_MAX_PAGES
    include_contractor_expiry: bool = False


@dataclass(slots=True)
class ReconciliationEngine:
    """Make the Target's grants match the eligibility computed from the Source."""

    source: SourceRepository
    target: TargetRepository
    error_sink: ErrorSink
    settings: ReconciliationSettings
    clock: Clock = field(default=utcnow)
    sleep: Sleep = field(default=asyncio.sleep)

    async def reconcile(self) -> ReconciliationResult:
        """Run fetch, diff and apply once. Safe to re-run.

        Failures while loading state abort the run and are re-raised after being
        recorded. Failures of individual mutations are recorded and skipped.
        """

        try:
            workers, grants = await self._load_state()
            desired = build_desired_state(
                workers,
                name_prefix=self.settings.name_prefix,
                now=self.clock(),
                error_sink=self.error_sink,
                include_contractor_expiry=self.settings.include_contractor_expiry,
            )
            plan = plan_reconciliation(desired, grants, name_prefix=self.settings.name_prefix)
        except Exception as exc:
            log.exception("An error occurred while loading the reconciliation state")
            self.error_sink.record(f"Reconciliation aborted: {exc}")
            raise

        log.info(
            "Reconciliation plan: workers=%s, grants=%s, create=%s, update=%s, delete=%s",
            len(workers),
            len(grants),
            len(plan.to_create),
            len(plan.to_update),
            len(plan.to_delete),
        )
        result = await self._apply(plan)
        log.info(f"Finished reconciliation: {result.summary()} Failed: {result.failed}.")
        return result

    async def _load_state(self) -> tuple[list[Worker], list[AccessGrant]]:
        try:
            async with asyncio.TaskGroup() as group:
                workers_task = group.create_task(
                    self.source.list_workers_matched_to_contractors()
                )
                grants_task = group.create_task(
                    read_all_grants(
                        self.target.fetch_grant_page,
                        page_size=self.settings.page_size,
                        max_pages=self.settings.max_pages,
                    )
                )
        except ExceptionGroup as group_error:
            raise group_error.exceptions[0] from None
        return workers_task.result(), grants_task.result()

    async def _apply(self, plan: ReconciliationPlan) -> ReconciliationResult:
        deleted = await self._run(
            [self._delete_unit(GrantAction.DELETE, grant) for grant in plan.to_delete]
        )
        created = await self._run(
            [self._create_unit(GrantAction.CREATE, result) for result in plan.to_create]
        )

        # Updates are delete + create; every delete settles before any create so
        # the Target never holds two grants with the same label for one worker.
        update_deletes = await self._run(
            [
                self._delete_unit(GrantAction.UPDATE_DELETE, update.existing)
                for update in plan.to_update
            ]
        )
        replaceable = [
            update.desired
            for update, outcome in zip(plan.to_update, update_deletes, strict=True)
            if outcome.ok
        ]
        update_creates = await self._run(
            [self._create_unit(GrantAction.UPDATE_CREATE, result) for result in replaceable]
        )

        failures = [
            outcome
            for outcome in (*deleted, *created, *update_deletes, *update_creates)
            if isinstance(outcome, Failed)
        ]
        for failure in failures:
            self.error_sink.record(failure.message())

        return ReconciliationResult(
            added=_count_applied(created),
            updated=_count_applied(update_creates),
            deleted=_count_applied(deleted),
            failed=len(failures),
        )

    async def _run(self, units: Sequence[MutationUnit]) -> list[MutationOutcome]:
        return await run_in_batches(
            units,
            batch_size=self.settings.batch_size,
            delay_seconds=self.settings.batch_delay_seconds,
            sleep=self.sleep,
        )

    def _delete_unit(self, action: GrantAction, grant: AccessGrant) -> MutationUnit:
        subject = f"{grant.email or '<no email>'} (id {grant.grant_id})"
        return partial(attempt, action, subject, partial(self.target.delete_grant, grant.grant_id))

    def _create_unit(self, action: GrantAction, result: EligibilityResult) -> MutationUnit:
        request = result.to_grant_request(self.settings.group_id)
        subject = f"{result.email} ({result.valid_from} - {result.valid_to})"
        return partial(attempt, action, subject, partial(self.target.create_grant, request))


def _count_applied(outcomes: Sequence[MutationOutcome]) -> int:
    return sum(1 for outcome in outcomes if outcome.ok)


__all__ = ["ReconciliationEngine", "ReconciliationSettings"]
