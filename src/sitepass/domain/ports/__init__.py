"""Domain port definitions for adapters."""

from __future__ import annotations

from .errors import ErrorSink
from .source import SourceRepository
from .target import GrantPage, GrantPageFetcher, TargetRepository

__all__ = [
    "ErrorSink",
    "GrantPage",
    "GrantPageFetcher",
    "SourceRepository",
    "TargetRepository",
]
