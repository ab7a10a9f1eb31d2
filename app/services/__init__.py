"""Auth and issue services. Each takes the request's ``AsyncSession``."""

from app.services.auth import AuthService
from app.services.issue_commands import IssueCommandHandler
from app.services.issue_queries import IssueFilters, IssueQueryEngine

__all__ = ["AuthService", "IssueCommandHandler", "IssueFilters", "IssueQueryEngine"]
