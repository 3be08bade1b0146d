from __future__ import annotations

import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .constants import (
    DEFAULT_API_URL,
    DEFAULT_PAGE_SIZE,
    DEFAULT_RETRIES,
    DEFAULT_RETRY_INTERVAL_S,
    DEFAULT_TIMEOUT_S,
    DEFAULT_USER_AGENT,
)
from .errors import InvalidArgument


class ConnectionParams(BaseModel):
    """
    Everything the transport needs to talk to one API server.

    retries is the TOTAL number of attempts per call (>= 1); retry_interval_s is
    the fixed wait between two attempts. timeout_s applies to connect and read,
    per attempt.
    """

    model_config = ConfigDict(frozen=True)

    api_url: str = Field(default=DEFAULT_API_URL, min_length=1)
    timeout_s: float = Field(default=DEFAULT_TIMEOUT_S, gt=0)
    user_agent: str = Field(default=DEFAULT_USER_AGENT, min_length=1)

    proxy_uri: Optional[str] = None
    proxy_user: Optional[str] = None
    proxy_password: Optional[str] = Field(default=None, repr=False)

    retries: int = Field(default=DEFAULT_RETRIES, ge=1)
    retry_interval_s: float = Field(default=DEFAULT_RETRY_INTERVAL_S, ge=0)

    page_size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)

    @model_validator(mode="after")
    def _check_proxy(self) -> "ConnectionParams":
        if (self.proxy_user is None) != (self.proxy_password is None):
            raise ValueError("proxy_user and proxy_password must be given together")
        if self.proxy_user is not None and not self.proxy_uri:
            raise ValueError("proxy credentials given without proxy_uri")
        return self

    @staticmethod
    def from_env_and_creds(creds: Optional[Dict[str, Any]] = None) -> "ConnectionParams":
        """
        creds keys win over RADIOBROWSER_* environment variables, which win over defaults.
        Raises InvalidArgument on anything pydantic rejects.
        """
        creds = creds or {}
        raw: Dict[str, Any] = {}
        for name in ConnectionParams.model_fields:
            value = creds.get(name)
            if value is None:
                value = (os.getenv(f"RADIOBROWSER_{name.upper()}") or "").strip() or None
            if value is not None:
                raw[name] = value
        return load_config(raw)


def load_config(raw: Dict[str, Any]) -> ConnectionParams:
    try:
        return ConnectionParams.model_validate(raw or {})
    except ValidationError as e:
        raise InvalidArgument(f"Invalid radio-browser connection params: {e}") from e
