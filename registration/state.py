from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

FIELD_NAMES = ("first_name", "last_name", "email", "birth_date", "address", "password")

FIELD_LABELS = {
    "first_name": "First name",
    "last_name": "Last name",
    "email": "Email",
    "birth_date": "Birth date",
    "address": "Address",
    "password": "Password",
}


class FieldSet(BaseModel):
    first_name: str = Field(default="", description="At least 3 characters")
    last_name: str = Field(default="", description="At least 3 characters")
    email: str = Field(default="", description="User email")
    birth_date: str = Field(default="", description="YYYY-MM-DD, not in the future")
    address: str = Field(default="", description="At least 5 characters")
    password: str = Field(default="", description="8+ chars, upper, lower, digit, symbol")


class ValidationIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str
    message: str


class RegistrationState(FieldSet):
    changed_field: Optional[str] = Field(default=None, description="Field edited by the last event")
    issues: List[ValidationIssue] = Field(default_factory=list)
    errors: Dict[str, str] = Field(default_factory=dict)

    def fieldset(self) -> FieldSet:
        return FieldSet(**{name: getattr(self, name) for name in FIELD_NAMES})
