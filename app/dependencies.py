"""FastAPI dependencies: the access guard and the injected services."""

from dataclasses import dataclass

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.config import get_db
from app.errors import AuthError
from app.security import decode_access_token
from app.services.auth import AuthService
from app.services.issue_commands import IssueCommandHandler
from app.services.issue_queries import IssueQueryEngine

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """Identity taken from a verified bearer token."""

    user_id: int
    email: str


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> CurrentUser:
    """
    Gate for protected routes.

    Reads ``Authorization: Bearer <token>``, verifies signature and expiry,
    and returns the caller's identity. This is the only source of the
    current user; request bodies and query strings are never trusted for it.
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("Access denied. No token provided.")

    claims = decode_access_token(credentials.credentials)
    return CurrentUser(user_id=claims["userId"], email=claims["email"])


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_issue_queries(db: AsyncSession = Depends(get_db)) -> IssueQueryEngine:
    return IssueQueryEngine(db)


def get_issue_commands(db: AsyncSession = Depends(get_db)) -> IssueCommandHandler:
    return IssueCommandHandler(db)
