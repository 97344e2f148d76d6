from __future__ import annotations

from sitepass.domain.eligibility import compute_eligibility
from sitepass.domain.model import Worker  # noqa: TC001
from sitepass.domain.reconciliation import (
    DesiredState,
    build_desired_state,
    grant_needs_update,
    plan_reconciliation,
)
from tests.helpers.access import (
    NOW,
    PREFIX,
    RecordingErrorSink,
    days,
    make_contractor,
    make_grant,
    make_worker,
)


def _desired(*workers: Worker) -> DesiredState:
    return build_desired_state(
        workers,
        name_prefix=PREFIX,
        now=NOW,
        error_sink=RecordingErrorSink(),
    )


def test_compliant_worker_without_grant_is_created() -> None:
    plan = plan_reconciliation(_desired(make_worker()), [], name_prefix=PREFIX)

    assert [result.email for result in plan.to_create] == ["jo@example.com"]
    assert plan.to_update == []
    assert plan.to_delete == []


def test_matching_grant_is_left_alone() -> None:
    plan = plan_reconciliation(_desired(make_worker()), [make_grant()], name_prefix=PREFIX)

    assert plan.is_empty


def test_email_matching_is_case_insensitive() -> None:
    desired = _desired(make_worker("Jo@Example.com"))
    grant = make_grant("jo@EXAMPLE.com", name=f"{PREFIX} Jo Acme Scaffolding Jo@Example.com: -")

    plan = plan_reconciliation(desired, [grant], name_prefix=PREFIX)

    assert plan.is_empty


def test_three_day_drift_is_an_update() -> None:
    grant = make_grant(valid_until=NOW + days(27))

    plan = plan_reconciliation(_desired(make_worker()), [grant], name_prefix=PREFIX)

    assert len(plan.to_update) == 1
    assert plan.to_update[0].existing is grant
    assert plan.to_update[0].desired.valid_to == NOW + days(30)
    assert plan.to_create == []
    assert plan.to_delete == []


def test_one_day_drift_is_tolerated() -> None:
    grant = make_grant(valid_from=NOW - days(31), valid_until=NOW + days(29))

    plan = plan_reconciliation(_desired(make_worker()), [grant], name_prefix=PREFIX)

    assert plan.is_empty


def test_changed_identity_is_an_update() -> None:
    worker = make_worker(contractor=make_contractor(display_name="Bolt Electrical"))

    plan = plan_reconciliation(_desired(worker), [make_grant()], name_prefix=PREFIX)

    assert len(plan.to_update) == 1


def test_identity_comparison_ignores_case() -> None:
    result = compute_eligibility(make_worker(), name_prefix=PREFIX, now=NOW)
    grant = make_grant(name=result.display_label.upper())

    assert not grant_needs_update(grant, result)


def test_missing_grant_window_is_an_update() -> None:
    result = compute_eligibility(make_worker(), name_prefix=PREFIX, now=NOW)

    assert grant_needs_update(make_grant(valid_from=None), result)
    assert grant_needs_update(make_grant(valid_until=None), result)


def test_non_compliant_worker_loses_every_grant() -> None:
    worker = make_worker(inductions=[(NOW - days(60), NOW - days(2))])
    ours = make_grant(grant_id=1)
    manual = make_grant(grant_id=2, name="Front desk pass")

    plan = plan_reconciliation(_desired(worker), [ours, manual], name_prefix=PREFIX)

    assert plan.to_delete == [ours, manual]
    assert plan.to_create == []


def test_unknown_email_only_loses_prefixed_grants() -> None:
    ours = make_grant("gone@example.com", grant_id=1)
    manual = make_grant("visitor@example.com", grant_id=2, name="Visitor pass")
    lookalike = make_grant("x@example.com", grant_id=3, name=f"{PREFIX}X badge")

    plan = plan_reconciliation(_desired(), [ours, manual, lookalike], name_prefix=PREFIX)

    assert plan.to_delete == [ours]


def test_duplicate_prefixed_grants_are_removed() -> None:
    first = make_grant(grant_id=1)
    duplicate = make_grant(grant_id=2)
    manual = make_grant(grant_id=3, name="Manual")

    plan = plan_reconciliation(
        _desired(make_worker()), [first, duplicate, manual], name_prefix=PREFIX
    )

    assert plan.to_update == []
    assert plan.to_delete == [duplicate]


def test_grants_without_email_are_ignored() -> None:
    plan = plan_reconciliation(_desired(), [make_grant(None, grant_id=5)], name_prefix=PREFIX)

    assert plan.is_empty


def test_unmatched_worker_is_reported_and_excluded() -> None:
    sink = RecordingErrorSink()
    worker = make_worker("lost@example.com", matched=False)

    desired = build_desired_state([worker], name_prefix=PREFIX, now=NOW, error_sink=sink)
    plan = plan_reconciliation(
        desired, [make_grant("LOST@Example.com", grant_id=9)], name_prefix=PREFIX
    )

    assert sink.messages == ["The worker lost@example.com does not contain a contractor"]
    assert desired.excluded_emails == {"lost@example.com"}
    assert plan.is_empty


def test_first_result_wins_for_duplicate_worker_emails() -> None:
    first = make_worker(worker_id=1, first_name="Jo")
    second = make_worker(worker_id=2, first_name="Joanna")

    desired = _desired(first, second)

    assert desired.compliant["jo@example.com"].worker is first


def test_missing_worker_is_reported_without_excluding_anyone() -> None:
    sink = RecordingErrorSink()

    desired = build_desired_state(
        [None, make_worker()],
        name_prefix=PREFIX,
        now=NOW,
        error_sink=sink,
    )

    assert sink.messages == ["worker must not be None"]
    assert desired.excluded_emails == set()
    assert list(desired.compliant) == ["jo@example.com"]
