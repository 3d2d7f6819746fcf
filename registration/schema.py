"""Declarative field rules for the registration form.

Rules are evaluated in declaration order and each failing rule produces its
own issue, so a field with several rules (password) can fail several times
in one pass.
"""

import re
from datetime import date, datetime
from typing import Callable, NamedTuple, Optional, Tuple

from email_validator import EmailNotValidError, validate_email

DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

# forms a browser date parser also understands; the format rule still flags
# everything except YYYY-MM-DD
LENIENT_DATE_FORMATS = ("%Y-%m-%d", "%m-%d-%Y", "%m/%d/%Y", "%Y/%m/%d")


class FieldRule(NamedTuple):
    field: str
    message: str
    check: Callable[[str, date], bool]


def min_length(n: int) -> Callable[[str, date], bool]:
    return lambda value, today: len(value) >= n


def contains(pattern: str) -> Callable[[str, date], bool]:
    compiled = re.compile(pattern)
    return lambda value, today: compiled.search(value) is not None


def is_email(value: str, today: date) -> bool:
    # the value is posted verbatim, so display names and padding are not addresses
    if "<" in value or value != value.strip():
        return False
    try:
        validate_email(value, check_deliverability=False, test_environment=True)
    except EmailNotValidError:
        return False
    return True


def is_iso_date(value: str, today: date) -> bool:
    return DATE_PATTERN.fullmatch(value) is not None


def parse_date(value: str) -> Optional[date]:
    for fmt in LENIENT_DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


def is_past_or_today(value: str, today: date) -> bool:
    parsed = parse_date(value)
    return parsed is not None and parsed <= today


REGISTRATION_RULES: Tuple[FieldRule, ...] = (
    FieldRule("first_name", "First name must be at least 3 characters", min_length(3)),
    FieldRule("last_name", "Last name must be at least 3 characters", min_length(3)),
    FieldRule("email", "Email is invalid", is_email),
    FieldRule("birth_date", "Date must use the YYYY-MM-DD format", is_iso_date),
    FieldRule("birth_date", "Date cannot be in the future", is_past_or_today),
    FieldRule("address", "Enter your full address", min_length(5)),
    FieldRule("password", "Password must be at least 8 characters", min_length(8)),
    FieldRule("password", "Password must contain at least one uppercase letter", contains(r"[A-Z]")),
    FieldRule("password", "Password must contain at least one lowercase letter", contains(r"[a-z]")),
    FieldRule("password", "Password must contain at least one number", contains(r"[0-9]")),
    FieldRule("password", "Password must contain at least one special character", contains(r"[^A-Za-z0-9]")),
)
