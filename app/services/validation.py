"""Field rules for users and books, applied before anything is persisted.

Validators return a ValidationResult instead of raising so the calling service
decides which error (and message) a failure maps to.
"""

import math
import re
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 5

# Leading integer of a query value: "3abc" -> 3, "2.7" -> 2, " 4" -> 4.
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

BOOK_FIELDS = ("title", "author", "year")


class FieldError(BaseModel):
    """One failed rule."""

    field: str
    message: str


class ValidationResult(BaseModel):
    """Normalized values plus any rule failures."""

    values: dict[str, Any] = Field(default_factory=dict)
    errors: list[FieldError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(self, field: str, message: str) -> None:
        self.errors.append(FieldError(field=field, message=message))

    def error_dicts(self) -> list[dict[str, str]]:
        return [e.model_dump() for e in self.errors]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    """Finite int or float; bools are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _clean_text(result: ValidationResult, field: str, value: Any) -> None:
    """Trim a required text field into result.values, or record why it is rejected."""
    if value is None:
        result.add_error(field, f"{field} is required")
        return
    if not isinstance(value, str):
        result.add_error(field, f"{field} must be a string")
        return
    cleaned = value.strip()
    if not cleaned:
        result.add_error(field, f"{field} is required")
    else:
        result.values[field] = cleaned


def normalize_email(email: Any) -> str:
    """Trimmed, lowercased email; empty string for anything that is not a string."""
    if not isinstance(email, str):
        return ""
    return email.strip().lower()


def validate_registration(username: Any, email: Any, password: Any) -> ValidationResult:
    """Rules for a new user. Password is checked for presence only and never trimmed."""
    result = ValidationResult()
    _clean_text(result, "username", username)
    _clean_text(result, "email", normalize_email(email) or None)
    if not isinstance(password, str) or not password:
        result.add_error("password", "password is required")
    else:
        result.values["password"] = password
    return result


def validate_new_book(title: Any, author: Any, year: Any) -> ValidationResult:
    """
    Rules for creating a book.

    year is required here even though the column is nullable, and a year of 0
    is rejected as missing. Updates do not share this rule.
    """
    result = ValidationResult()
    _clean_text(result, "title", title)
    _clean_text(result, "author", author)
    if not year:
        result.add_error("year", "year is required")
    elif not _is_number(year):
        result.add_error("year", "year must be a number")
    else:
        result.values["year"] = year
    return result


def validate_book_changes(changes: dict[str, Any]) -> ValidationResult:
    """
    Rules for a partial update: only keys present in changes are checked.

    title and author may not be emptied or nulled; year may be any number or
    None (clears it). Unknown keys are ignored.
    """
    result = ValidationResult()
    if "title" in changes:
        _clean_text(result, "title", changes["title"])
    if "author" in changes:
        _clean_text(result, "author", changes["author"])
    if "year" in changes:
        year = changes["year"]
        if year is None or _is_number(year):
            result.values["year"] = year
        else:
            result.add_error("year", "year must be a number")
    return result


def parse_book_id(raw: Any) -> int | None:
    """Return the id as a positive int, or None when it is not a well-formed id."""
    if _is_int(raw):
        return raw if raw > 0 else None
    if not isinstance(raw, str) or not (raw.isascii() and raw.isdigit()):
        return None
    value = int(raw)
    return value if value > 0 else None


def coerce_positive_int(raw: Any, default: int) -> int:
    """
    Parse a page/limit value the lenient way.

    Missing, non-numeric or zero values fall back to default; anything else is
    floored at 1.
    """
    parsed: int | None = None
    if _is_int(raw):
        parsed = raw
    elif isinstance(raw, str):
        match = _LEADING_INT.match(raw)
        if match:
            parsed = int(match.group(1))
    if not parsed:
        parsed = default
    return max(parsed, 1)


def normalize_search(raw: Any) -> str:
    """Trimmed search text; empty string means no filter."""
    if not isinstance(raw, str):
        return ""
    return raw.strip()
