"""Paging primitives shared by repositories and services."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")

MAX_PAGE_SIZE = 50


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page request. Sizes above MAX_PAGE_SIZE are clamped."""

    page: int = 0
    size: int = 20

    def __post_init__(self) -> None:
        object.__setattr__(self, "page", max(self.page, 0))
        object.__setattr__(self, "size", min(max(self.size, 1), MAX_PAGE_SIZE))

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the total number of matching rows."""

    items: list[T]
    total: int
    request: PageRequest

    @property
    def pages(self) -> int:
        if self.total <= 0:
            return 1
        return (self.total + self.request.size - 1) // self.request.size

    def map(self, fn: Callable[[T], U]) -> "Page[U]":
        return Page(
            items=[fn(item) for item in self.items],
            total=self.total,
            request=self.request,
        )
