"""Paged result DTO."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results.

    Attributes:
        items: Items on this page.
        total: Number of matches before paging.
        offset: Index of the first item.
        limit: Requested page size.
    """

    items: list[T] = field(default_factory=list)
    total: int = 0
    offset: int = 0
    limit: int = 0

    @property
    def has_more(self) -> bool:
        return self.offset + len(self.items) < self.total

    @classmethod
    def slice(cls, matches: list[T], offset: int, limit: int) -> "Page[T]":
        """Page an already filtered and sorted list."""
        return cls(
            items=matches[offset : offset + limit],
            total=len(matches),
            offset=offset,
            limit=limit,
        )
