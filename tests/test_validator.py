# tests/test_validator.py

from datetime import date

import pytest
from registration.state import FieldSet, ValidationIssue
from registration.validator import RegistrationValidator

VALID = {
    "first_name": "Khushi",
    "last_name": "Kaushik",
    "email": "khushi@gmail.com",
    "birth_date": "2004-01-01",
    "address": "12 Park Street",
    "password": "Abcdef1!",
}


@pytest.fixture
def validator():
    return RegistrationValidator(today=lambda: date(2026, 10, 19))


def issues_for(validator, field, **values):
    fieldset = FieldSet(**{**VALID, **values})
    return [issue for issue in validator.validate(fieldset) if issue.field == field]


def test_valid_record_has_no_issues(validator):
    assert validator.validate(FieldSet(**VALID)) == []


def test_empty_record_flags_every_field(validator):
    fields = {issue.field for issue in validator.validate(FieldSet())}
    assert fields == set(VALID)


@pytest.mark.parametrize(
    "field,short,ok",
    [
        ("first_name", "Kh", "Khu"),
        ("last_name", "Ka", "Kau"),
        ("address", "12 P", "12 Pa"),
    ],
)
def test_minimum_lengths(validator, field, short, ok):
    assert len(issues_for(validator, field, **{field: short})) == 1
    assert issues_for(validator, field, **{field: ok}) == []


def test_invalid_email_yields_one_issue(validator):
    issues = issues_for(validator, "email", email="not-an-email")
    assert issues == [ValidationIssue(field="email", message="Email is invalid")]


def test_future_birth_date(validator):
    issues = issues_for(validator, "birth_date", birth_date="2999-01-01")
    assert [i.message for i in issues] == ["Date cannot be in the future"]


def test_past_and_today_birth_date_accepted(validator):
    assert issues_for(validator, "birth_date", birth_date="2000-01-01") == []
    assert issues_for(validator, "birth_date", birth_date="2026-10-19") == []
    assert len(issues_for(validator, "birth_date", birth_date="2026-10-20")) == 1


def test_wrong_date_format_is_not_a_future_issue(validator):
    issues = issues_for(validator, "birth_date", birth_date="01-01-2000")
    assert [i.message for i in issues] == ["Date must use the YYYY-MM-DD format"]


def test_unparsable_date_is_rejected(validator):
    issues = issues_for(validator, "birth_date", birth_date="2023-02-30")
    assert [i.message for i in issues] == ["Date cannot be in the future"]


def test_password_failures_in_rule_order(validator):
    issues = issues_for(validator, "password", password="abc")
    assert [i.message for i in issues] == [
        "Password must be at least 8 characters",
        "Password must contain at least one uppercase letter",
        "Password must contain at least one number",
        "Password must contain at least one special character",
    ]


def test_password_slot_joins_messages(validator):
    issues = validator.validate(FieldSet(**{**VALID, "password": "abc"}))
    slot = validator.derive_error_for("password", issues)
    assert slot.split("\n") == [i.message for i in issues if i.field == "password"]


def test_password_slot_empty_when_valid(validator):
    issues = validator.validate(FieldSet(**{**VALID, "email": "nope"}))
    assert validator.derive_error_for("password", issues) == ""


def test_derive_single_field(validator):
    issues = validator.validate(FieldSet(**{**VALID, "first_name": "K"}))
    assert validator.derive_error_for("first_name", issues) == "First name must be at least 3 characters"
    assert validator.derive_error_for("email", issues) == ""


def test_validate_is_idempotent(validator):
    fieldset = FieldSet(first_name="K", email="x", password="abc")
    assert validator.validate(fieldset) == validator.validate(fieldset)


@pytest.mark.parametrize(
    "email",
    ["John Doe <john@example.com>", "<john@example.com>", " john@example.com ", "john@example.com\n"],
)
def test_display_names_and_padding_are_not_emails(validator, email):
    assert len(issues_for(validator, "email", email=email)) == 1


def test_special_use_domain_is_syntactically_valid(validator):
    assert issues_for(validator, "email", email="john@localhost.test") == []


@pytest.mark.parametrize("value", ["abc", ""])
def test_unparsable_malformed_date_fails_both_rules(validator, value):
    issues = issues_for(validator, "birth_date", birth_date=value)
    assert [i.message for i in issues] == [
        "Date must use the YYYY-MM-DD format",
        "Date cannot be in the future",
    ]


def test_malformed_future_date_fails_both_rules(validator):
    issues = issues_for(validator, "birth_date", birth_date="01/01/2999")
    assert len(issues) == 2


def test_two_date_issues_show_format_message(validator):
    issues = validator.validate(FieldSet(**{**VALID, "birth_date": "abc"}))
    assert validator.derive_error_for("birth_date", issues) == "Date must use the YYYY-MM-DD format"
