from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from registration.schema import REGISTRATION_RULES, FieldRule
from registration.state import FIELD_NAMES, FieldSet, RegistrationState, ValidationIssue

# fields whose simultaneous failures are shown together instead of one at a time
AGGREGATED_FIELDS = {"password"}


class RegistrationValidator:
    def __init__(
        self,
        rules: Optional[Sequence[FieldRule]] = None,
        today: Optional[Callable[[], date]] = None,
        refresh_all_slots: bool = False,
    ):
        self.rules = tuple(rules) if rules is not None else REGISTRATION_RULES
        self.today = today or date.today
        self.refresh_all_slots = refresh_all_slots

    def validate(self, fieldset: FieldSet) -> List[ValidationIssue]:
        """
        Checks every rule against the whole record and returns one issue per
        failing rule, in rule order.
        """
        today = self.today()
        issues: List[ValidationIssue] = []

        for rule in self.rules:
            value = getattr(fieldset, rule.field)
            if not rule.check(value, today):
                issues.append(ValidationIssue(field=rule.field, message=rule.message))

        return issues

    @staticmethod
    def derive_error_for(field_name: str, issues: Iterable[ValidationIssue]) -> str:
        messages = [issue.message for issue in issues if issue.field == field_name]

        if field_name in AGGREGATED_FIELDS:
            return "\n".join(messages)

        return messages[0] if messages else ""

    def validate_fields(self, state: RegistrationState) -> Dict[str, Any]:
        issues = self.validate(state.fieldset())
        return {"issues": [issue.model_dump() for issue in issues]}

    def derive_errors(self, state: RegistrationState) -> Dict[str, Any]:
        """
        Rewrites the error slot of the field that just changed. Other slots
        keep whatever their own last change produced unless
        refresh_all_slots is set.
        """
        if self.refresh_all_slots:
            targets: Sequence[str] = FIELD_NAMES
        elif state.changed_field is not None:
            targets = (state.changed_field,)
        else:
            targets = ()

        errors: Dict[str, str] = dict(state.errors)
        for field in targets:
            errors[field] = self.derive_error_for(field, state.issues)

        return {"errors": errors}
