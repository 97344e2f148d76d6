from __future__ import annotations

from datetime import UTC, datetime

import pytest

from sitepass.config import MissingConfigurationError
from sitepass.domain.reconciliation import ReconciliationResult
from sitepass.ui import cli as cli_module


def test_reconcile_logs_summary(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    monkeypatch.setattr(
        cli_module,
        "reconcile_access",
        lambda: ReconciliationResult(added=2, updated=1, deleted=3),
    )

    with caplog.at_level("INFO"):
        cli_module.main(["reconcile"])

    assert "Removed: 3 workers. Added 2 workers. Updated 1 workers." in caplog.text


def test_reconcile_failure_exits_1(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing() -> ReconciliationResult:
        raise RuntimeError("kisi unavailable")

    monkeypatch.setattr(cli_module, "reconcile_access", failing)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["reconcile"])

    assert excinfo.value.code == 1


def test_missing_configuration_exits_2(monkeypatch: pytest.MonkeyPatch) -> None:
    def unconfigured() -> ReconciliationResult:
        raise MissingConfigurationError("Missing configuration for: KISI_API_TOKEN")

    monkeypatch.setattr(cli_module, "reconcile_access", unconfigured)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["reconcile"])

    assert excinfo.value.code == 2


def test_grant_passes_emails_and_window(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_create(emails: list[str], **kwargs: object) -> list[None]:
        captured["emails"] = emails
        captured.update(kwargs)
        return [None for _ in emails]

    monkeypatch.setattr(cli_module, "create_grants", fake_create)

    cli_module.main(
        [
            "grant",
            "--email",
            "a@example.com",
            "--email",
            "b@example.com",
            "--valid-from",
            "2025-01-01T10:00:00+10:00",
            "--valid-until",
            "2025-02-01T00:00:00Z",
        ]
    )

    assert captured["emails"] == ["a@example.com", "b@example.com"]
    assert captured["valid_from"] == datetime(2025, 1, 1, 0, 0, tzinfo=UTC)
    assert captured["valid_until"] == datetime(2025, 2, 1, 0, 0, tzinfo=UTC)


def test_grant_without_window(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_create(emails: list[str], **kwargs: object) -> list[None]:
        captured.update(kwargs)
        return [None for _ in emails]

    monkeypatch.setattr(cli_module, "create_grants", fake_create)

    cli_module.main(["grant", "--email", "a@example.com"])

    assert captured == {"valid_from": None, "valid_until": None}


def test_grant_invalid_timestamp_exits_2(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_module, "create_grants", lambda *_, **__: [])

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["grant", "--email", "a@example.com", "--valid-from", "not-a-date"])

    assert excinfo.value.code == 2


def test_grant_reversed_window_exits_2() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(
            [
                "grant",
                "--email",
                "a@example.com",
                "--valid-from",
                "2025-02-01",
                "--valid-until",
                "2025-01-01",
            ]
        )

    assert excinfo.value.code == 2


def test_missing_command_exits_2() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main([])

    assert excinfo.value.code == 2
