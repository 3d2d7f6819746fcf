import os
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

load_dotenv()

DEFAULT_REGISTRATION_URL = "http://localhost:3000/register"


class EndpointConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str = DEFAULT_REGISTRATION_URL
    # seconds; None waits for the server indefinitely
    timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "EndpointConfig":
        timeout = os.getenv("REGISTRATION_TIMEOUT")
        return cls(
            url=os.getenv("REGISTRATION_URL", DEFAULT_REGISTRATION_URL),
            timeout=float(timeout) if timeout else None,
        )
