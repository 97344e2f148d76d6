"""Pydantic models describing the Kisi group-link payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class KisiBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class IssuedByPayload(KisiBaseModel):
    id: int
    name: str | None = None
    email: str | None = None


class GroupLinkPayload(KisiBaseModel):
    id: int
    email: str | None = None
    name: str | None = None
    group_id: int | None = None
    issued_by_id: int | None = None
    link_enabled: bool = True
    valid_from: datetime | None = None
    valid_until: datetime | None = None
    last_used_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    issued_by: IssuedByPayload | None = None


class GroupLinkFields(KisiBaseModel):
    name: str
    email: str
    group_id: int
    valid_from: datetime | None = None
    valid_until: datetime | None = None


class GroupLinkCreatePayload(KisiBaseModel):
    group_link: GroupLinkFields


GroupLinkList = TypeAdapter(list[GroupLinkPayload])


class CollectionRange(KisiBaseModel):
    """Parsed ``X-Collection-Range`` header (``start-end/total``)."""

    start: int
    end: int
    total: int = Field(ge=0)
