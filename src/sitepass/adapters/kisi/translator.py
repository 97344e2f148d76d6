"""Translate between Kisi group links and domain grants."""

from __future__ import annotations

import re

from sitepass.domain.model import AccessGrant, GrantRequest

from .schema import CollectionRange, GroupLinkCreatePayload, GroupLinkFields, GroupLinkPayload

COLLECTION_RANGE_HEADER = "X-Collection-Range"
_RANGE_PATTERN = re.compile(r"^(?P<start>\d+)-(?P<end>\d+)/(?P<total>\d+)$")


def parse_collection_range(value: str | None) -> CollectionRange | None:
    """Parse ``start-end/total``; ``None`` when the header is absent or malformed."""

    if value is None:
        return None
    match = _RANGE_PATTERN.match(value.strip())
    if match is None:
        return None
    return CollectionRange(
        start=int(match["start"]),
        end=int(match["end"]),
        total=int(match["total"]),
    )


def parse_group_link(payload: GroupLinkPayload) -> AccessGrant:
    return AccessGrant(
        grant_id=payload.id,
        email=payload.email,
        name=payload.name,
        group_id=payload.group_id,
        valid_from=payload.valid_from,
        valid_until=payload.valid_until,
        link_enabled=payload.link_enabled,
        issued_by_id=payload.issued_by_id,
        created_at=payload.created_at,
        updated_at=payload.updated_at,
        last_used_at=payload.last_used_at,
    )


def build_create_payload(request: GrantRequest) -> dict[str, object]:
    body = GroupLinkCreatePayload(
        group_link=GroupLinkFields(
            name=request.name,
            email=request.email,
            group_id=request.group_id,
            valid_from=request.valid_from,
            valid_until=request.valid_until,
        )
    )
    return body.model_dump(mode="json")
