from datetime import datetime
from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class IssueStatus(str, Enum):
    OPEN = "Open"
    IN_PROGRESS = "InProgress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"

class IssuePriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

class IssueSeverity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class CamelModel(BaseModel):
    """Response model serialised with camelCase keys."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# Request bodies. Every field is optional here so the issue validators,
# not the parser, decide which message a missing value produces.

class RegisterRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None

class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

class IssueCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    severity: Optional[str] = None

class IssueUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    severity: Optional[str] = None


# Responses

class UserResponse(CamelModel):
    id: int
    email: str
    name: Optional[str] = None
    created_at: datetime

class OwnerSummary(CamelModel):
    id: int
    email: str
    name: Optional[str] = None

class IssueResponse(CamelModel):
    id: int
    title: str
    description: str
    status: IssueStatus
    priority: IssuePriority
    severity: IssueSeverity
    owner_id: int
    created_at: datetime
    updated_at: datetime
    owner: OwnerSummary

class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_count: int
    limit: int
    has_next_page: bool
    has_previous_page: bool

class StatusCounts(BaseModel):
    Open: int = 0
    InProgress: int = 0
    Resolved: int = 0
    Closed: int = 0


class AuthData(CamelModel):
    user: UserResponse
    token: str

class UserData(CamelModel):
    user: UserResponse

class IssueData(CamelModel):
    issue: IssueResponse

class IssueListData(CamelModel):
    issues: list[IssueResponse]
    pagination: Pagination

class IssueStats(CamelModel):
    counts: StatusCounts
    total: int


class Envelope(BaseModel, Generic[T]):
    """Uniform response wrapper: ``{success, message?, data?}``."""

    success: bool
    message: Optional[str] = None
    data: Optional[T] = None


def ok(data=None, message: Optional[str] = None) -> Envelope:
    """Build a success envelope carrying only the parts that were supplied."""
    fields = {"success": True}
    if message is not None:
        fields["message"] = message
    if data is not None:
        fields["data"] = data
    return Envelope(**fields)
