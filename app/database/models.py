from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from app.database.config import Base
from app.schemas import IssuePriority, IssueSeverity, IssueStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(191), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(191), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    issues = relationship("Issue", back_populates="owner", passive_deletes=True)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"


class Issue(Base):
    __tablename__ = "issues"
    __table_args__ = (
        Index("ix_issues_status_priority", "status", "priority"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(
        Enum(*[s.value for s in IssueStatus], name="issue_status"),
        nullable=False,
        default=IssueStatus.OPEN.value,
        index=True,
    )
    priority = Column(
        Enum(*[p.value for p in IssuePriority], name="issue_priority"),
        nullable=False,
        default=IssuePriority.MEDIUM.value,
    )
    severity = Column(
        Enum(*[s.value for s in IssueSeverity], name="issue_severity"),
        nullable=False,
        default=IssueSeverity.MEDIUM.value,
    )
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    owner = relationship("User", back_populates="issues")

    def __repr__(self):
        return f"<Issue(id={self.id}, status='{self.status}', owner_id={self.owner_id})>"
