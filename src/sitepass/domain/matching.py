"""Join Source workers onto the contractors they work for."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sitepass.domain.model import Contractor, Worker


def match_workers_to_contractors(
    workers: Iterable[Worker],
    contractors: Iterable[Contractor],
) -> list[Worker]:
    """Attach each worker's primary contractor by id.

    Workers whose contractor cannot be found are returned with ``contractor=None``
    so eligibility can report them instead of dropping them silently.
    """

    by_id: dict[int, Contractor] = {}
    for contractor in contractors:
        by_id.setdefault(contractor.contractor_id, contractor)

    matched: list[Worker] = []
    for worker in workers:
        reference = worker.primary_contractor
        contractor = by_id.get(reference.contractor_id) if reference is not None else None
        matched.append(worker.with_contractor(contractor))
    return matched


__all__ = ["match_workers_to_contractors"]
