"""Kisi group-link API repository."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from sitepass.domain.eligibility import simple_grant_label
from sitepass.domain.model import GrantRequest
from sitepass.domain.ports import TargetRepository
from sitepass.domain.ports.target import GrantPage

from .schema import GroupLinkList, GroupLinkPayload
from .translator import (
    COLLECTION_RANGE_HEADER,
    build_create_payload,
    parse_collection_range,
    parse_group_link,
)

if TYPE_CHECKING:
    from datetime import datetime

    from sitepass.adapters.http_resilience import ResilientClient
    from sitepass.domain.model import AccessGrant

log = getLogger(__name__)

GROUP_LINKS_PATH = "group_links"


class KisiAPIError(RuntimeError):
    """Raised when the Kisi API returns a payload we cannot interpret."""


@dataclass(slots=True)
class KisiTargetRepository:
    """Reads and mutates group links through an authenticated Kisi client.

    Kisi has no way to change the window of an existing group link, so the
    repository only offers create and delete.
    """

    client: ResilientClient
    group_id: int
    name_prefix: str

    async def fetch_grant_page(self, offset: int, page_size: int) -> GrantPage:
        response = await self.client.get(
            GROUP_LINKS_PATH,
            params={"limit": page_size, "offset": offset},
        )
        response.raise_for_status()
        if not response.content.strip():
            return GrantPage()

        try:
            payloads = GroupLinkList.validate_json(response.content)
        except ValidationError as exc:
            raise KisiAPIError("Failed to parse the Kisi group link listing") from exc

        collection_range = parse_collection_range(response.headers.get(COLLECTION_RANGE_HEADER))
        if collection_range is None:
            log.warning(
                "Kisi listing at offset %s has no usable %s header",
                offset,
                COLLECTION_RANGE_HEADER,
            )
        return GrantPage(
            items=tuple(parse_group_link(payload) for payload in payloads),
            range_end=collection_range.end if collection_range else None,
            total=collection_range.total if collection_range else None,
        )

    async def create_grant(self, request: GrantRequest) -> AccessGrant | None:
        response = await self.client.post(GROUP_LINKS_PATH, json=build_create_payload(request))
        response.raise_for_status()
        log.info(f"Created group link for {request.email} ({request.name})")
        if not response.content.strip():
            return None
        try:
            return parse_group_link(GroupLinkPayload.model_validate_json(response.content))
        except ValidationError:
            log.debug("Kisi create response for %s was not a group link", request.email)
            return None

    async def delete_grant(self, grant_id: int) -> None:
        response = await self.client.delete(f"{GROUP_LINKS_PATH}/{grant_id}")
        if response.status_code == httpx.codes.NOT_FOUND:
            log.info("Group link %s was already removed", grant_id)
            return
        response.raise_for_status()
        log.info("Removed group link %s", grant_id)

    async def create_simple_grant(
        self,
        email: str,
        valid_from: datetime | None = None,
        valid_until: datetime | None = None,
    ) -> AccessGrant | None:
        """Create a grant for ``email`` that is not derived from a Source worker."""

        return await self.create_grant(
            GrantRequest(
                email=email,
                name=simple_grant_label(self.name_prefix, email, valid_from, valid_until),
                group_id=self.group_id,
                valid_from=valid_from,
                valid_until=valid_until,
            )
        )


if TYPE_CHECKING:
    from sitepass.config.http_resilience import ResilienceConfig

    _repository_check: TargetRepository = KisiTargetRepository(
        client=ResilientClient(ResilienceConfig(name="kisi")),
        group_id=0,
        name_prefix="",
    )
