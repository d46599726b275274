"""Common schemas shared across API endpoints."""

from collections.abc import Callable
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from plaza.domain.shared.pagination import Page

T = TypeVar("T")
S = TypeVar("S")


class CamelModel(BaseModel):
    """Base schema rendered with camelCase keys, accepting either style."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ApiResponse(CamelModel, Generic[T]):
    """Standard envelope: ``{success, message, data}``."""

    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable outcome")
    data: Optional[T] = Field(default=None, description="Payload, if any")

    @classmethod
    def ok(cls, message: str, data: Any = None) -> "ApiResponse[T]":
        return cls(success=True, message=message, data=data)


class PageResponse(CamelModel, Generic[T]):
    """One page of items. Pages are zero-based."""

    items: list[T] = Field(..., description="List of items")
    total: int = Field(..., description="Total number of items")
    page: int = Field(..., description="Current page number (zero-based)")
    page_size: int = Field(..., description="Items per page")
    pages: int = Field(..., description="Total number of pages")

    @classmethod
    def from_page(cls, page: Page[S], mapper: Callable[[S], T]) -> "PageResponse[T]":
        return cls(
            items=[mapper(item) for item in page.items],
            total=page.total,
            page=page.request.page,
            page_size=page.request.size,
            pages=page.pages,
        )


class HealthResponse(CamelModel):
    """Health check response schema."""

    success: bool
    message: str
