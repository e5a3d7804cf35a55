"""Field Validation — per-field rule functions for request input.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - Each check_* returns a FieldOutcome; reason is None on success
    - Text fields are trimmed, length-checked, then escaped
    - Absent dates mean "no override"; present-but-unparseable dates are invalid
    - validate_* wrappers raise the first failure as an ExerciseTrackerError

Design Decisions:
    - Escaping mirrors the classic HTML entity set (& < > " ' / \\ `)
    - Dates accept ISO 8601 calendar dates and date-times; only the date part is kept
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from app.core.domain_types import ExerciseField, ExerciseQuery, UserId
from app.core.errors import (
    FieldValidationError, InvalidDateError, InvalidIdError, MissingFieldError,
)

MIN_PASSWORD_LENGTH = 8

_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
    "/": "&#x2F;",
    "\\": "&#x5C;",
    "`": "&#96;",
}

# ASCII digits only; stored ids and limits must fit a signed 64-bit column
_NUMERIC = re.compile(r"[0-9]+(\.[0-9]+)?")
_DIGITS = re.compile(r"[0-9]+")
MAX_INTEGER = 2**63 - 1


@dataclass(frozen=True)
class FieldOutcome:
    """Result of checking a single field."""
    field: ExerciseField
    value: Any = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None


@dataclass(frozen=True)
class ExerciseInput:
    """Normalized body of a create-exercise request."""
    description: str
    duration: str
    exercise_date: date | None = None


# ─── Primitives ──────────────────────────────────────────────────

def escape(value: str) -> str:
    """Replace HTML-significant characters with entities."""
    return "".join(_ESCAPES.get(ch, ch) for ch in value)


def as_text(raw: Any) -> str | None:
    """Coerce a JSON scalar to text. Booleans and containers are not text."""
    if isinstance(raw, str):
        return raw
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return str(raw)
    return None


def is_present(raw: Any) -> bool:
    """True unless the value is missing or the empty string."""
    return raw is not None and raw != ""


def parse_date(value: str) -> date | None:
    """Parse an ISO 8601 date or date-time. None when it is not a valid date."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


def _to_integer(text: str) -> int | None:
    """Non-negative integer within MAX_INTEGER, or None."""
    if not _DIGITS.fullmatch(text):
        return None
    value = int(text)
    return value if value <= MAX_INTEGER else None


def _check_text(field: ExerciseField, raw: Any, min_length: int) -> FieldOutcome:
    text = as_text(raw)
    if text is None:
        return FieldOutcome(field, reason="missing")
    text = text.strip()
    if len(text) < min_length:
        return FieldOutcome(field, reason=f"must be at least {min_length} characters")
    return FieldOutcome(field, escape(text))


# ─── Field Rules ─────────────────────────────────────────────────

def check_username(raw: Any) -> FieldOutcome:
    return _check_text(ExerciseField.USERNAME, raw, 1)


def check_password(raw: Any) -> FieldOutcome:
    return _check_text(ExerciseField.PASSWORD, raw, MIN_PASSWORD_LENGTH)


def check_description(raw: Any) -> FieldOutcome:
    return _check_text(ExerciseField.DESCRIPTION, raw, 1)


def check_duration(raw: Any) -> FieldOutcome:
    outcome = _check_text(ExerciseField.DURATION, raw, 1)
    if outcome.ok and not _NUMERIC.fullmatch(outcome.value):
        return FieldOutcome(ExerciseField.DURATION, reason="must be numeric")
    return outcome


def check_date(raw: Any, field: ExerciseField = ExerciseField.DATE) -> FieldOutcome:
    """Optional date. Success with value None when absent or blank."""
    text = as_text(raw)
    if text is None:
        if raw is None:
            return FieldOutcome(field)
        return FieldOutcome(field, reason="not a date")
    text = text.strip()
    if not text:
        return FieldOutcome(field)
    parsed = parse_date(escape(text))
    if parsed is None:
        return FieldOutcome(field, reason="not a date")
    return FieldOutcome(field, parsed)


def check_limit(raw: Any) -> FieldOutcome:
    """Optional non-negative integer row cap."""
    if not is_present(raw):
        return FieldOutcome(ExerciseField.LIMIT)
    text = as_text(raw)
    value = _to_integer(text.strip()) if text is not None else None
    if value is None:
        return FieldOutcome(ExerciseField.LIMIT, reason="must be a non-negative integer")
    return FieldOutcome(ExerciseField.LIMIT, value)


def check_user_id(raw: Any) -> FieldOutcome:
    text = as_text(raw)
    value = _to_integer(text) if text is not None else None
    if value is None:
        return FieldOutcome(ExerciseField.USER_ID, reason="must be numeric")
    return FieldOutcome(ExerciseField.USER_ID, UserId(value))


# ─── Endpoint Validators ─────────────────────────────────────────

def validate_registration(
    username: Any, password: Any, require_password: bool,
) -> str:
    """Presence first (400), then rules (422). Returns the escaped username.

    The password is only checked here; hashing applies its own normalization.
    """
    if not is_present(username):
        raise MissingFieldError("username")
    if require_password and not is_present(password):
        raise MissingFieldError("password")

    outcomes = [check_username(username)]
    if require_password:
        outcomes.append(check_password(password))
    failed = [o.field.value for o in outcomes if not o.ok]
    if failed:
        raise FieldValidationError(failed, "Invalid input")

    return outcomes[0].value


def validate_exercise_input(description: Any, duration: Any, date_raw: Any) -> ExerciseInput:
    """Field rules (422 Invalid input data) before date validity (422 Invalid date)."""
    desc = check_description(description)
    dur = check_duration(duration)
    failed = [o.field.value for o in (desc, dur) if not o.ok]
    if failed:
        raise FieldValidationError(failed)

    when = check_date(date_raw)
    if not when.ok:
        raise InvalidDateError(ExerciseField.DATE.value)

    return ExerciseInput(desc.value, dur.value, when.value)


def validate_query_filters(from_raw: Any, to_raw: Any, limit_raw: Any) -> ExerciseQuery:
    start = check_date(from_raw, ExerciseField.FROM)
    if not start.ok:
        raise InvalidDateError(ExerciseField.FROM.value, "Invalid start date")
    end = check_date(to_raw, ExerciseField.TO)
    if not end.ok:
        raise InvalidDateError(ExerciseField.TO.value, "Invalid end date")
    limit = check_limit(limit_raw)
    if not limit.ok:
        raise FieldValidationError([ExerciseField.LIMIT.value], "Invalid limit")
    return ExerciseQuery(start.value, end.value, limit.value)


def validate_user_id(raw: Any) -> UserId:
    outcome = check_user_id(raw)
    if not outcome.ok:
        raise InvalidIdError(str(raw))
    return outcome.value
