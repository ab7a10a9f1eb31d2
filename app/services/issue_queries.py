"""Read side of the issue store: filtered, paginated listing and status stats."""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import false, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.database import models
from app.schemas import IssueStatus
from app.validation import DEFAULT_LIMIT, DEFAULT_PAGE, ISSUE_CHOICES

logger = logging.getLogger(__name__)


@dataclass
class IssueFilters:
    """Optional list filters. Empty strings count as "not supplied"."""

    search: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    severity: Optional[str] = None


@dataclass
class PageInfo:
    current_page: int
    total_pages: int
    total_count: int
    limit: int
    has_next_page: bool
    has_previous_page: bool


@dataclass
class IssuePage:
    issues: list[models.Issue]
    pagination: PageInfo


def build_page_info(page: int, limit: int, total_count: int) -> PageInfo:
    total_pages = math.ceil(total_count / limit)
    return PageInfo(
        current_page=page,
        total_pages=total_pages,
        total_count=total_count,
        limit=limit,
        has_next_page=page < total_pages,
        has_previous_page=page > 1,
    )


class IssueQueryEngine:
    """Builds owner-scoped predicates over the issue table and runs them."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def conditions(owner_id: int, filters: IssueFilters) -> list:
        where = [models.Issue.owner_id == owner_id]

        if filters.search:
            where.append(
                or_(
                    models.Issue.title.icontains(filters.search, autoescape=True),
                    models.Issue.description.icontains(filters.search, autoescape=True),
                )
            )
        for name, choices in ISSUE_CHOICES.items():
            value = getattr(filters, name)
            if not value:
                continue
            # An out-of-set value can never match a stored row
            if value not in {member.value for member in choices}:
                where.append(false())
            else:
                where.append(getattr(models.Issue, name) == value)

        return where

    async def list_issues(
        self,
        owner_id: int,
        filters: IssueFilters,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
    ) -> IssuePage:
        where = self.conditions(owner_id, filters)

        # The page and the count are separate reads; drift under concurrent
        # writes is tolerated.
        result = await self.db.execute(
            select(models.Issue)
            .options(joinedload(models.Issue.owner))
            .where(*where)
            .order_by(models.Issue.created_at.desc(), models.Issue.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        issues = list(result.scalars().all())

        total_count = await self.db.scalar(
            select(func.count()).select_from(models.Issue).where(*where)
        )

        logger.debug(
            f"Listed {len(issues)} of {total_count} issues",
            extra={"owner_id": owner_id, "page": page, "limit": limit},
        )
        return IssuePage(issues=issues, pagination=build_page_info(page, limit, total_count or 0))

    async def get_stats(self, owner_id: int) -> tuple[dict[str, int], int]:
        """Count the owner's issues per status; every status is present."""
        result = await self.db.execute(
            select(models.Issue.status, func.count(models.Issue.id))
            .where(models.Issue.owner_id == owner_id)
            .group_by(models.Issue.status)
        )

        counts = {status.value: 0 for status in IssueStatus}
        for status, count in result.all():
            counts[status] = count

        return counts, sum(counts.values())
