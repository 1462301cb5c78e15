"""
Pagination Utility Module

Offset helpers shared by the list endpoints. Boards are paged with
skip / take, everything else with page / limit; both end up here as an
offset and a row count.
"""
from typing import List, Any, Optional, Tuple
from pydantic import BaseModel
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from app.core.config import settings


class PaginationParams(BaseModel):
    """page / limit query parameters (1-indexed pages)"""
    page: int = 1
    limit: int = 20

    @property
    def offset(self) -> int:
        return (max(1, self.page) - 1) * self.size

    @property
    def size(self) -> int:
        return clamp_page_size(self.limit)


def clamp_page_size(size: int) -> int:
    """Cap a requested page size at MAX_PAGE_SIZE"""
    return max(0, min(size, settings.MAX_PAGE_SIZE))


async def paginate(
    db: AsyncSession,
    query: Select,
    offset: int = 0,
    limit: int = 20,
    count_query: Optional[Select] = None
) -> Tuple[List[Any], int]:
    """
    Run a SQLAlchemy query for one page and count the full result.

    Args:
        db: Database session
        query: Base query, already filtered and ordered
        offset: Rows to skip
        limit: Rows to return
        count_query: Optional custom count query (use when ``query`` carries loader options)

    Returns:
        (items, total)
    """
    if count_query is None:
        count_query = select(func.count()).select_from(query.order_by(None).subquery())

    total = (await db.execute(count_query)).scalar() or 0

    result = await db.execute(query.offset(max(0, offset)).limit(limit))
    items = list(result.scalars().all())

    return items, total
