"""Public interface for the Kisi (Target) adapter."""

from __future__ import annotations

from .client import KisiAPIError, KisiTargetRepository
from .schema import CollectionRange, GroupLinkPayload
from .translator import build_create_payload, parse_collection_range, parse_group_link

__all__ = [
    "CollectionRange",
    "GroupLinkPayload",
    "KisiAPIError",
    "KisiTargetRepository",
    "build_create_payload",
    "parse_collection_range",
    "parse_group_link",
]
