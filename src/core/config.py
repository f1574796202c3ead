"""Client settings. Defaults match the reference game server running locally."""

import os
from typing import Self

from pydantic import BaseModel, PositiveFloat, field_validator

DEFAULT_SERVER_URL = "http://localhost:6969"
DEFAULT_TIMEOUT_S = 5.0

SERVER_URL_ENV = "CHECKERS_SERVER_URL"
TIMEOUT_ENV = "CHECKERS_TIMEOUT_S"


class ClientSettings(BaseModel):
    base_url: str = DEFAULT_SERVER_URL
    timeout_s: PositiveFloat = DEFAULT_TIMEOUT_S

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def from_env(cls) -> Self:
        """Overrides from the environment, falling back to the defaults for anything not set."""
        overrides: dict[str, str] = {}
        if url := os.environ.get(SERVER_URL_ENV):
            overrides["base_url"] = url
        if timeout := os.environ.get(TIMEOUT_ENV):
            overrides["timeout_s"] = timeout
        return cls.model_validate(overrides)
