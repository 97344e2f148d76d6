from __future__ import annotations

import asyncio
from collections.abc import Callable  # noqa: TC003
from datetime import UTC, datetime

import httpx
import pytest

from sitepass.adapters.linksafe import (
    LinkSafeAPIError,
    LinkSafeSourceRepository,
    WorkersResponse,
    parse_worker,
)
from sitepass.adapters.linksafe.client import CONTRACTORS_PATH, WORKERS_PATH
from sitepass.config import linksafe_resilience
from tests.helpers.http import make_mock_client

WORKERS = {
    "workers": [
        {
            "workerID": 1,
            "emailAddress": "jo@example.com",
            "firstName": "Jo",
            "isCompliant": True,
            "inductions": [
                {
                    "inductionID": 11,
                    "inductedOnUtc": "2024-05-16T08:00:00",
                    "expiresOnUtc": "2025-05-16T08:00:00",
                }
            ],
            "primaryContractor": {"contractorID": 10, "displayName": "Acme"},
        },
        {
            "workerID": 2,
            "emailAddress": "  ",
            "firstName": "Nomail",
            "isCompliant": True,
            "inductions": [],
            "primaryContractor": {"contractorID": 10, "displayName": "Acme"},
        },
        {
            "workerID": 3,
            "emailAddress": "lee@example.com",
            "firstName": None,
            "isCompliant": False,
            "inductions": [],
            "primaryContractor": {"contractorID": 99, "displayName": "Gone Pty"},
        },
    ]
}

CONTRACTORS = {
    "contractors": [
        {
            "contractorID": 10,
            "displayName": "Acme",
            "isCompliant": True,
            "status": "Active",
            "nonCompliantItems": 0,
            "records": [
                {"recordID": 1, "recordType": "Insurance", "expiresOnUtc": "2025-01-01T00:00:00Z"},
                {"recordID": 2, "recordType": "Licence", "expiresOnUtc": None},
            ],
        }
    ]
}


def _repository(handler: Callable[[httpx.Request], httpx.Response]) -> LinkSafeSourceRepository:
    return LinkSafeSourceRepository(
        client=make_mock_client(linksafe_resilience("ls-token"), handler)
    )


def _routes(request: httpx.Request) -> httpx.Response:
    if request.url.path == f"/{WORKERS_PATH}":
        return httpx.Response(200, json=WORKERS)
    if request.url.path == f"/{CONTRACTORS_PATH}":
        return httpx.Response(200, json=CONTRACTORS)
    return httpx.Response(404)


def test_parse_worker_reads_aliases_and_treats_naive_times_as_utc() -> None:
    payload = WorkersResponse.model_validate(WORKERS).workers[0]

    worker = parse_worker(payload)

    assert worker is not None
    assert worker.worker_id == 1
    assert worker.email == "jo@example.com"
    assert worker.inductions[0].inducted_on == datetime(2024, 5, 16, 8, tzinfo=UTC)
    assert worker.primary_contractor is not None
    assert worker.primary_contractor.contractor_id == 10
    assert worker.contractor is None


def test_list_workers_skips_workers_without_email() -> None:
    headers: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        headers.append(request.headers["apikey"])
        return _routes(request)

    workers = asyncio.run(_repository(handler).list_workers())

    assert [worker.email for worker in workers] == ["jo@example.com", "lee@example.com"]
    assert workers[1].first_name == ""
    assert headers == ["ls-token"]


def test_list_contractors_drops_records_without_expiry() -> None:
    (contractor,) = asyncio.run(_repository(_routes).list_contractors())

    assert contractor.display_name == "Acme"
    assert contractor.status == "Active"
    assert [record.record_id for record in contractor.records] == [1]
    assert contractor.records[0].expires_on == datetime(2025, 1, 1, tzinfo=UTC)


def test_workers_are_matched_to_contractors() -> None:
    workers = asyncio.run(_repository(_routes).list_workers_matched_to_contractors())

    by_email = {worker.email: worker for worker in workers}
    matched = by_email["jo@example.com"].contractor
    assert matched is not None
    assert matched.contractor_id == 10
    assert by_email["lee@example.com"].contractor is None


def test_empty_body_yields_no_workers() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"")

    assert asyncio.run(_repository(handler).list_workers()) == []


def test_unexpected_payload_raises() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"workers": [{"emailAddress": "x@example.com"}]})

    with pytest.raises(LinkSafeAPIError):
        asyncio.run(_repository(handler).list_workers())


def test_http_errors_propagate() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(_repository(handler).list_contractors())
