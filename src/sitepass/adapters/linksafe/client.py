"""LinkSafe compliance API repository."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, ValidationError

from sitepass.domain.matching import match_workers_to_contractors
from sitepass.domain.ports import SourceRepository

from .schema import ContractorsResponse, WorkersResponse
from .translator import parse_contractor, parse_worker

if TYPE_CHECKING:
    from sitepass.adapters.http_resilience import ResilientClient
    from sitepass.domain.model import Contractor, Worker

log = getLogger(__name__)

WORKERS_PATH = "2.0/Compliance/Workers/List"
CONTRACTORS_PATH = "2.0/Compliance/Contractors/List"


class LinkSafeAPIError(RuntimeError):
    """Raised when the LinkSafe API returns a payload we cannot interpret."""


@dataclass(slots=True)
class LinkSafeSourceRepository:
    """Reads workers and contractors through an authenticated LinkSafe client."""

    client: ResilientClient

    async def list_workers(self) -> list[Worker]:
        response = await self._get(WORKERS_PATH, WorkersResponse)
        if response is None:
            return []
        workers = [parse_worker(payload) for payload in response.workers]
        return [worker for worker in workers if worker is not None]

    async def list_contractors(self) -> list[Contractor]:
        response = await self._get(CONTRACTORS_PATH, ContractorsResponse)
        if response is None:
            return []
        return [parse_contractor(payload) for payload in response.contractors]

    async def list_workers_matched_to_contractors(self) -> list[Worker]:
        workers = await self.list_workers()
        contractors = await self.list_contractors()
        log.info(f"Fetched {len(workers)} workers and {len(contractors)} contractors from LinkSafe")
        return match_workers_to_contractors(workers, contractors)

    async def _get[TModel: BaseModel](self, path: str, model: type[TModel]) -> TModel | None:
        response = await self.client.get(path)
        response.raise_for_status()
        if not response.content.strip():
            return None
        try:
            return model.model_validate_json(response.content)
        except ValidationError as exc:
            log.error(f"Unexpected LinkSafe payload from {path}: {exc}")
            raise LinkSafeAPIError(f"Unexpected LinkSafe response payload from {path}") from exc


if TYPE_CHECKING:
    from sitepass.config.http_resilience import ResilienceConfig

    _repository_check: SourceRepository = LinkSafeSourceRepository(
        client=ResilientClient(ResilienceConfig(name="linksafe"))
    )
