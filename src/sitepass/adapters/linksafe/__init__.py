"""Public interface for the LinkSafe (Source) adapter."""

from __future__ import annotations

from .client import LinkSafeAPIError, LinkSafeSourceRepository
from .schema import ContractorsResponse, WorkersResponse
from .translator import parse_contractor, parse_worker

__all__ = [
    "ContractorsResponse",
    "LinkSafeAPIError",
    "LinkSafeSourceRepository",
    "WorkersResponse",
    "parse_contractor",
    "parse_worker",
]
