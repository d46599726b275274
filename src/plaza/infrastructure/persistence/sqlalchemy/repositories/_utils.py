"""Shared utilities for SQLAlchemy repositories."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from plaza.domain.shared.pagination import PageRequest


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes (SQLite drops the offset)."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


async def fetch_page(
    session: AsyncSession,
    stmt: Select[Any],
    page_request: PageRequest,
) -> tuple[list[Any], int]:
    """
    Run ``stmt`` for one page and count all rows it would match.

    Returns the scalar rows of the page and the total count.
    """
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await session.execute(count_stmt)).scalar_one()

    paged = stmt.offset(page_request.offset).limit(page_request.size)
    rows = (await session.execute(paged)).scalars().all()
    return list(rows), total
