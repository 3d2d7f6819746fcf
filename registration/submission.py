"""HTTP client for the remote registration endpoint.

The endpoint answers a rejected registration with a 4xx status and a body of
the form ``{"errors": [{"path": "email", "msg": "taken"}, ...]}``. Only the
first entry is meaningful to the form; it is raised as ``SubmissionRejected``.
Every other failure surfaces as a ``requests`` exception.
"""

import logging
from typing import Any, Dict, Optional, Tuple

import requests

from config.endpoint import EndpointConfig

logger = logging.getLogger(__name__)


class SubmissionRejected(Exception):
    """The endpoint refused the record and named the offending field."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


def first_error(body: Any) -> Optional[Tuple[str, str]]:
    """Return (path, msg) of the first structured error, or None if the body has another shape."""
    if not isinstance(body, dict):
        return None

    errors = body.get("errors")
    if not isinstance(errors, list) or not errors:
        return None

    entry = errors[0]
    if not isinstance(entry, dict):
        return None

    path = entry.get("path")
    if isinstance(path, list):
        path = path[0] if path else None
    msg = entry.get("msg")

    if not isinstance(path, str) or not isinstance(msg, str):
        return None
    return path, msg


class RegistrationClient:
    def __init__(self, config: Optional[EndpointConfig] = None):
        self.config = config or EndpointConfig.from_env()

    def register(self, payload: Dict[str, str]) -> Any:
        """
        POST the record as JSON.

        Returns:
            Decoded JSON success payload, or the raw text if it is not JSON.

        Raises:
            SubmissionRejected: 4xx response carrying a structured error list
            requests.RequestException: transport failures and any other non-2xx response
        """
        response = requests.post(self.config.url, json=payload, timeout=self.config.timeout)

        if 400 <= response.status_code < 500:
            try:
                entry = first_error(response.json())
            except ValueError:
                entry = None
            if entry is not None:
                raise SubmissionRejected(*entry)

        response.raise_for_status()

        try:
            result = response.json()
        except ValueError:
            result = response.text

        logger.info(f"Registration accepted by {self.config.url} (status {response.status_code})")
        return result
