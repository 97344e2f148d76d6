from __future__ import annotations

import json

import httpx
import pytest

from sitepass import app as app_module
from sitepass.adapters.kisi import KisiTargetRepository
from sitepass.config import SyncConfig, kisi_resilience
from sitepass.domain.reconciliation import ReconciliationResult, ReconciliationSettings
from tests.helpers.access import (
    GROUP_ID,
    NOW,
    PREFIX,
    FakeSourceRepository,
    FakeTargetRepository,
    RecordingErrorSink,
    make_worker,
)
from tests.helpers.http import make_mock_client

SETTINGS = ReconciliationSettings(name_prefix=PREFIX, group_id=GROUP_ID, batch_delay_seconds=0)


def test_reconcile_access_runs_engine_and_flushes() -> None:
    target = FakeTargetRepository()
    sink = RecordingErrorSink()

    result = app_module.reconcile_access(
        source=FakeSourceRepository(workers=[make_worker()]),
        target=target,
        error_sink=sink,
        settings=SETTINGS,
        clock=lambda: NOW,
    )

    assert result == ReconciliationResult(added=1)
    assert sink.flushes == 1
    assert not sink.flushed_on_main_thread


def test_reconcile_access_flushes_after_failure() -> None:
    sink = RecordingErrorSink()

    with pytest.raises(RuntimeError):
        app_module.reconcile_access(
            source=FakeSourceRepository(),
            target=FakeTargetRepository(fetch_error=RuntimeError("down")),
            error_sink=sink,
            settings=SETTINGS,
            clock=lambda: NOW,
        )

    assert sink.messages == ["Reconciliation aborted: down"]
    assert sink.flushes == 1


def test_build_error_log_falls_back_to_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(app_module, "get_email_config", lambda: None)

    error_log = app_module.build_error_log()

    assert isinstance(error_log._notifier, app_module.LoggingNotifier)  # noqa: SLF001


def test_create_grants_posts_one_link_per_email() -> None:
    posted: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        posted.append(json.loads(request.content)["group_link"]["email"])
        return httpx.Response(204)

    target = KisiTargetRepository(
        client=make_mock_client(kisi_resilience("token"), handler),
        group_id=GROUP_ID,
        name_prefix=PREFIX,
    )

    created = app_module.create_grants(
        ["a@example.com", "b@example.com", "c@example.com"],
        target=target,
        sync_config=SyncConfig(batch_size=2, batch_delay_seconds=0),
    )

    assert created == [None, None, None]
    assert sorted(posted) == ["a@example.com", "b@example.com", "c@example.com"]
