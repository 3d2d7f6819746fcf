import asyncio
import logging
from typing import Any, Dict, Optional

import requests

from registration.graph import RegistrationGraphFactory
from registration.state import FIELD_NAMES, FieldSet, RegistrationState
from registration.submission import RegistrationClient, SubmissionRejected
from registration.validator import RegistrationValidator

logger = logging.getLogger(__name__)


class RegistrationForm:
    """
    One mounted registration form: current field values plus one error slot
    per field. Only the latest state is held; the graph runs without a
    checkpointer so earlier values are not retained anywhere.
    """

    def __init__(
        self,
        validator: Optional[RegistrationValidator] = None,
        client: Optional[RegistrationClient] = None,
    ):
        self.validator = validator or RegistrationValidator()
        self.client = client or RegistrationClient()
        self.graph = RegistrationGraphFactory(self.validator).compile()
        self.state = RegistrationState()

    @property
    def values(self) -> FieldSet:
        return self.state.fieldset()

    @property
    def errors(self) -> Dict[str, str]:
        return dict(self.state.errors)

    def error_for(self, field_name: str) -> str:
        return self.errors.get(field_name, "")

    def has_error(self, field_name: str) -> bool:
        return bool(self.error_for(field_name))

    def on_field_change(self, field_name: str, new_value: str) -> Dict[str, str]:
        """
        Replace one field's value, re-validate the whole record and refresh
        that field's error slot. Returns the resulting error set.
        """
        if field_name not in FIELD_NAMES:
            raise ValueError(f"Unknown form field: {field_name!r}")
        if not isinstance(new_value, str):
            raise TypeError(f"{field_name} must be text, got {type(new_value).__name__}")

        patch = {field_name: new_value, "changed_field": field_name}
        result = self.graph.invoke({**self.state.model_dump(), **patch})
        self.state = RegistrationState.model_validate(result)

        errors = self.errors
        logger.debug(f"{field_name} changed, slot now {errors.get(field_name)!r}")
        return errors

    def apply_server_error(self, path: str, message: str) -> None:
        if path not in FIELD_NAMES:
            logger.warning(f"Ignoring server error for unknown field {path!r}: {message}")
            return

        errors = self.errors
        errors[path] = message
        self.state = self.state.model_copy(update={"errors": errors})

    async def submit(self) -> Optional[Any]:
        """
        Post the current values as they are. A structured rejection lands in
        the named field's error slot; other failures are only logged.
        """
        payload = self.values.model_dump()

        try:
            result = await asyncio.to_thread(self.client.register, payload)
        except SubmissionRejected as exc:
            logger.info(f"Registration rejected on {exc.path}: {exc.message}")
            self.apply_server_error(exc.path, exc.message)
            return None
        except requests.RequestException:
            logger.exception("Registration submit failed")
            return None

        logger.info(f"Registration response: {result}")
        return result
