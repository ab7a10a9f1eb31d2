"""Pure input validators shared by the auth and issue handlers.

Nothing here touches the database. Each ``validate_*`` function returns an
error message (or ``None``), and :func:`validate_issue_fields` folds them into
a :class:`ValidationResult` in a fixed field order.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from app.schemas import IssuePriority, IssueSeverity, IssueStatus

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6

TITLE_MIN, TITLE_MAX = 3, 255
DESCRIPTION_MIN, DESCRIPTION_MAX = 10, 5000

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

# Largest value an INTEGER column holds; (MAX_INT - 1) * MAX_INT still fits
# the 64-bit OFFSET the databases accept.
MAX_INT = 2**31 - 1
INT_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)

# Evaluation order matters: the first failing field is the one reported.
ISSUE_FIELDS = ("title", "description", "status", "priority", "severity")

ISSUE_CHOICES: dict[str, type[Enum]] = {
    "status": IssueStatus,
    "priority": IssuePriority,
    "severity": IssueSeverity,
}

ISSUE_DEFAULTS = {
    "status": IssueStatus.OPEN.value,
    "priority": IssuePriority.MEDIUM.value,
    "severity": IssueSeverity.MEDIUM.value,
}


@dataclass
class FieldError:
    field: str
    message: str


@dataclass
class ValidationResult:
    """Cleaned values plus any per-field errors."""

    values: dict[str, Any] = field(default_factory=dict)
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def first_error(self) -> Optional[FieldError]:
        return self.errors[0] if self.errors else None


def _length_error(label: str, value: str, minimum: int, maximum: int) -> Optional[str]:
    length = len(value.strip())
    if length < minimum:
        return f"{label} must be at least {minimum} characters long"
    if length > maximum:
        return f"{label} must not exceed {maximum} characters"
    return None


def validate_title(value: Optional[str]) -> Optional[str]:
    return _length_error("Title", value or "", TITLE_MIN, TITLE_MAX)


def validate_description(value: Optional[str]) -> Optional[str]:
    return _length_error("Description", value or "", DESCRIPTION_MIN, DESCRIPTION_MAX)


def validate_choice(name: str, value: Optional[str]) -> Optional[str]:
    choices = [member.value for member in ISSUE_CHOICES[name]]
    if value not in choices:
        return f"Invalid {name}. Must be one of: {', '.join(choices)}"
    return None


def _validate_field(name: str, value: Any) -> Optional[str]:
    if name == "title":
        return validate_title(value)
    if name == "description":
        return validate_description(value)
    return validate_choice(name, value)


def validate_issue_fields(fields: dict[str, Any], partial: bool = False) -> ValidationResult:
    """
    Validate issue fields for create (``partial=False``) or update.

    On create, title and description are required, and empty or missing
    enum fields fall back to their defaults. On update only keys present in
    ``fields`` are checked and returned; absent keys stay untouched.
    Text values come back trimmed.
    """
    result = ValidationResult()

    if not partial and (not fields.get("title") or not fields.get("description")):
        result.errors.append(FieldError("title", "Title and description are required"))
        return result

    for name in ISSUE_FIELDS:
        if partial:
            if name not in fields:
                continue
            value = fields[name]
        else:
            value = fields.get(name)
            if name in ISSUE_DEFAULTS and not value:
                result.values[name] = ISSUE_DEFAULTS[name]
                continue

        message = _validate_field(name, value)
        if message:
            result.errors.append(FieldError(name, message))
            continue
        result.values[name] = value.strip() if name in ("title", "description") else value

    return result


def validate_registration(email: Optional[str], password: Optional[str]) -> Optional[str]:
    if not email or not password:
        return "Email and password are required"
    if not EMAIL_PATTERN.match(email):
        return "Please provide a valid email address"
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
    return None


def parse_int(value: Any) -> Optional[int]:
    """Parse an integer from a path or query value, ``None`` if it is not one."""
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    if not INT_PATTERN.fullmatch(text):
        return None
    return int(text)


def in_id_range(value: int) -> bool:
    """True when ``value`` fits the integer primary key columns."""
    return 1 <= value <= MAX_INT


def page_params(page: Any, limit: Any) -> tuple[int, int]:
    """Coerce ``page``/``limit``; unusable values fall back to the defaults."""
    parsed_page = parse_int(page)
    parsed_limit = parse_int(limit)
    if parsed_page is None or not 1 <= parsed_page <= MAX_INT:
        parsed_page = DEFAULT_PAGE
    if parsed_limit is None or not 1 <= parsed_limit <= MAX_INT:
        parsed_limit = DEFAULT_LIMIT
    return parsed_page, parsed_limit
