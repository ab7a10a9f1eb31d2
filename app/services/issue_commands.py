"""Write side of the issue store, plus single-issue reads.

Every operation checks existence before ownership: a missing id is a 404,
an existing issue owned by someone else is a 403.
"""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.database import models
from app.errors import ForbiddenError, NotFoundError, ValidationError
from app.validation import in_id_range, parse_int, validate_issue_fields

logger = logging.getLogger(__name__)


class IssueCommandHandler:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _load(self, issue_id: int) -> models.Issue | None:
        result = await self.db.execute(
            select(models.Issue)
            .options(joinedload(models.Issue.owner))
            .where(models.Issue.id == issue_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def _owned(self, caller_id: int, raw_id: Any, action: str) -> models.Issue:
        issue_id = parse_int(raw_id)
        if issue_id is None:
            raise ValidationError("Invalid issue ID", field="id")

        # Ids outside the column range cannot exist
        issue = await self._load(issue_id) if in_id_range(issue_id) else None
        if not issue:
            raise NotFoundError("Issue not found")

        if issue.owner_id != caller_id:
            logger.warning(
                f"User {caller_id} denied {action} on issue {issue_id}",
                extra={"issue_id": issue_id, "caller_id": caller_id},
            )
            raise ForbiddenError(f"You do not have permission to {action} this issue")

        return issue

    async def get_by_id(self, caller_id: int, raw_id: Any) -> models.Issue:
        return await self._owned(caller_id, raw_id, "view")

    async def create(self, caller_id: int, fields: dict[str, Any]) -> models.Issue:
        result = validate_issue_fields(fields)
        if not result.ok:
            raise ValidationError(result.first_error.message, field=result.first_error.field)

        new_issue = models.Issue(owner_id=caller_id, **result.values)
        self.db.add(new_issue)
        await self.db.commit()

        logger.info("Issue created", extra={"issue_id": new_issue.id, "caller_id": caller_id})
        return await self._load(new_issue.id)

    async def update(self, caller_id: int, raw_id: Any, fields: dict[str, Any]) -> models.Issue:
        """Apply a partial update; keys absent from ``fields`` are left as-is."""
        issue = await self._owned(caller_id, raw_id, "update")

        result = validate_issue_fields(fields, partial=True)
        if not result.ok:
            raise ValidationError(result.first_error.message, field=result.first_error.field)

        for name, value in result.values.items():
            setattr(issue, name, value)

        await self.db.commit()

        logger.info(
            "Issue updated",
            extra={"issue_id": issue.id, "fields": sorted(result.values)},
        )
        return await self._load(issue.id)

    async def delete(self, caller_id: int, raw_id: Any) -> None:
        issue = await self._owned(caller_id, raw_id, "delete")

        await self.db.delete(issue)
        await self.db.commit()

        logger.info("Issue deleted", extra={"issue_id": issue.id, "caller_id": caller_id})
