"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from contextlib import AsyncExitStack
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from sitepass.adapters.http_resilience import ResilientClient
from sitepass.adapters.kisi import KisiTargetRepository
from sitepass.adapters.linksafe import LinkSafeSourceRepository
from sitepass.adapters.notify import ErrorLog, LoggingNotifier, SmtpNotifier
from sitepass.config import (
    get_email_config,
    get_kisi_config,
    get_linksafe_config,
    get_sync_config,
)
from sitepass.domain.rate_limit import run_in_batches
from sitepass.domain.reconciliation import ReconciliationEngine, ReconciliationSettings
from sitepass.domain.time_windows import utcnow

if TYPE_CHECKING:
    from datetime import datetime

    from sitepass.config import KisiConfig, SyncConfig
    from sitepass.domain.model import AccessGrant
    from sitepass.domain.ports import ErrorSink, SourceRepository, TargetRepository
    from sitepass.domain.reconciliation import ReconciliationResult
    from sitepass.domain.time_windows import Clock


log = getLogger(__name__)


def build_error_log() -> ErrorLog:
    """Error sink that emails when SMTP is configured and logs otherwise."""

    email_config = get_email_config()
    if email_config is None:
        log.info("No SMTP settings configured; errors will only be logged")
        return ErrorLog(LoggingNotifier())
    return ErrorLog(SmtpNotifier(email_config))


def build_settings(kisi: KisiConfig, sync: SyncConfig) -> ReconciliationSettings:
    return ReconciliationSettings(
        name_prefix=kisi.name_prefix,
        group_id=kisi.group_id,
        batch_size=sync.batch_size,
        batch_delay_seconds=sync.batch_delay_seconds,
        page_size=sync.page_size,
        max_pages=sync.max_pages,
        include_contractor_expiry=sync.include_contractor_expiry,
    )


def reconcile_access(
    *,
    source: SourceRepository | None = None,
    target: TargetRepository | None = None,
    error_sink: ErrorSink | None = None,
    settings: ReconciliationSettings | None = None,
    clock: Clock = utcnow,
) -> ReconciliationResult:
    """Run one reconciliation using the configured adapters.

    Collaborators that are not supplied are built from the environment. The
    error sink is flushed once the run ends, whether it succeeded or not.
    """

    return asyncio.run(
        reconcile_access_async(
            source=source,
            target=target,
            error_sink=error_sink,
            settings=settings,
            clock=clock,
        )
    )


async def reconcile_access_async(
    *,
    source: SourceRepository | None = None,
    target: TargetRepository | None = None,
    error_sink: ErrorSink | None = None,
    settings: ReconciliationSettings | None = None,
    clock: Clock = utcnow,
) -> ReconciliationResult:
    sink = error_sink or build_error_log()
    try:
        async with AsyncExitStack() as stack:
            if source is None:
                linksafe = get_linksafe_config()
                linksafe_client = await stack.enter_async_context(
                    ResilientClient(linksafe.resilience)
                )
                source = LinkSafeSourceRepository(client=linksafe_client)
            if settings is None or target is None:
                kisi = get_kisi_config()
                settings = settings or build_settings(kisi, get_sync_config())
                if target is None:
                    kisi_client = await stack.enter_async_context(
                        ResilientClient(kisi.resilience)
                    )
                    target = KisiTargetRepository(
                        client=kisi_client,
                        group_id=kisi.group_id,
                        name_prefix=kisi.name_prefix,
                    )

            log.info(
                "Starting access reconciliation: group_id=%s, prefix=%r, batch_size=%s",
                settings.group_id,
                settings.name_prefix,
                settings.batch_size,
            )
            engine = ReconciliationEngine(
                source=source,
                target=target,
                error_sink=sink,
                settings=settings,
                clock=clock,
            )
            return await engine.reconcile()
    finally:
        # SMTP delivery blocks, so it runs off the event loop
        await asyncio.to_thread(sink.flush)


def create_grants(
    emails: list[str],
    *,
    valid_from: datetime | None = None,
    valid_until: datetime | None = None,
    target: KisiTargetRepository | None = None,
    sync_config: SyncConfig | None = None,
) -> list[AccessGrant | None]:
    """Create simple grants for ``emails`` in rate-limited batches."""

    return asyncio.run(
        _create_grants(
            emails,
            valid_from=valid_from,
            valid_until=valid_until,
            target=target,
            sync_config=sync_config or get_sync_config(),
        )
    )


async def _create_grants(
    emails: list[str],
    *,
    valid_from: datetime | None,
    valid_until: datetime | None,
    target: KisiTargetRepository | None,
    sync_config: SyncConfig,
) -> list[AccessGrant | None]:
    async with AsyncExitStack() as stack:
        if target is None:
            kisi = get_kisi_config()
            client = await stack.enter_async_context(ResilientClient(kisi.resilience))
            target = KisiTargetRepository(
                client=client,
                group_id=kisi.group_id,
                name_prefix=kisi.name_prefix,
            )
        units = [
            partial(target.create_simple_grant, email, valid_from, valid_until)
            for email in emails
        ]
        created = await run_in_batches(
            units,
            batch_size=sync_config.batch_size,
            delay_seconds=sync_config.batch_delay_seconds,
        )
    log.info(f"Created {len(created)} group links")
    return created
