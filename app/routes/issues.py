from typing import Optional

from fastapi import APIRouter, Depends, status

from app.dependencies import CurrentUser, get_current_user, get_issue_commands, get_issue_queries
from app.schemas import (
    Envelope,
    IssueCreate,
    IssueData,
    IssueListData,
    IssueResponse,
    IssueStats,
    IssueUpdate,
    Pagination,
    StatusCounts,
    ok,
)
from app.services.issue_commands import IssueCommandHandler
from app.services.issue_queries import IssueFilters, IssueQueryEngine
from app.validation import page_params

router = APIRouter(
    prefix="/api/issues",
    tags=["issues"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/stats", response_model=Envelope[IssueStats], response_model_exclude_unset=True)
async def issue_stats(
    current_user: CurrentUser = Depends(get_current_user),
    queries: IssueQueryEngine = Depends(get_issue_queries),
):
    """Count the caller's issues per status"""
    counts, total = await queries.get_stats(current_user.user_id)
    return ok(IssueStats(counts=StatusCounts(**counts), total=total))


@router.get("", response_model=Envelope[IssueListData], response_model_exclude_unset=True)
@router.get("/", response_model=Envelope[IssueListData], response_model_exclude_unset=True, include_in_schema=False)
async def list_issues(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    search: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    severity: Optional[str] = None,
    current_user: CurrentUser = Depends(get_current_user),
    queries: IssueQueryEngine = Depends(get_issue_queries),
):
    """List the caller's issues, newest first, with search, filters and paging"""
    page_number, page_size = page_params(page, limit)
    filters = IssueFilters(search=search, status=status, priority=priority, severity=severity)

    result = await queries.list_issues(current_user.user_id, filters, page=page_number, limit=page_size)

    return ok(
        IssueListData(
            issues=[IssueResponse.model_validate(issue) for issue in result.issues],
            pagination=Pagination.model_validate(result.pagination),
        )
    )


@router.get("/{issue_id}", response_model=Envelope[IssueData], response_model_exclude_unset=True)
async def get_issue(
    issue_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    commands: IssueCommandHandler = Depends(get_issue_commands),
):
    """Get issue by ID"""
    issue = await commands.get_by_id(current_user.user_id, issue_id)
    return ok(IssueData(issue=IssueResponse.model_validate(issue)))


@router.post(
    "",
    response_model=Envelope[IssueData],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
@router.post(
    "/",
    response_model=Envelope[IssueData],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def create_issue(
    payload: IssueCreate,
    current_user: CurrentUser = Depends(get_current_user),
    commands: IssueCommandHandler = Depends(get_issue_commands),
):
    """Create new issue owned by the caller"""
    issue = await commands.create(current_user.user_id, payload.model_dump())
    return ok(IssueData(issue=IssueResponse.model_validate(issue)), message="Issue created successfully")


@router.put("/{issue_id}", response_model=Envelope[IssueData], response_model_exclude_unset=True)
async def update_issue(
    issue_id: str,
    payload: IssueUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    commands: IssueCommandHandler = Depends(get_issue_commands),
):
    """Update the supplied fields of an issue"""
    issue = await commands.update(
        current_user.user_id, issue_id, payload.model_dump(exclude_unset=True)
    )
    return ok(IssueData(issue=IssueResponse.model_validate(issue)), message="Issue updated successfully")


@router.delete("/{issue_id}", response_model=Envelope[dict], response_model_exclude_unset=True)
async def delete_issue(
    issue_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    commands: IssueCommandHandler = Depends(get_issue_commands),
):
    """Delete issue by ID"""
    await commands.delete(current_user.user_id, issue_id)
    return ok(message="Issue deleted successfully")
