"""Runtime settings for the analysis service call."""

from __future__ import annotations

import os
from dataclasses import dataclass

import httpx

DEFAULT_MODEL = "kimi-k2-0711-preview"
DEFAULT_BASE_URL = "https://api.moonshot.cn/v1"
DEFAULT_TEMPERATURE = 0.3
DEFAULT_TIMEOUT_SECONDS = 120.0
MODEL_ENV_VAR = "MOONSHOT_MODEL"
BASE_URL_ENV_VAR = "MOONSHOT_BASE_URL"
TIMEOUT_ENV_VAR = "MOONSHOT_TIMEOUT_SECONDS"


@dataclass(slots=True)
class ReviewSettings:
    """Model and transport settings used when calling the analysis service."""

    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    temperature: float = DEFAULT_TEMPERATURE
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> ReviewSettings:
        """Build settings from defaults with environment overrides."""
        timeout_value = os.getenv(TIMEOUT_ENV_VAR)
        timeout_seconds = DEFAULT_TIMEOUT_SECONDS
        if timeout_value:
            try:
                timeout_seconds = float(timeout_value)
            except ValueError as error:
                raise ValueError(
                    f"{TIMEOUT_ENV_VAR} must be a number, got '{timeout_value}'."
                ) from error
            if timeout_seconds <= 0:
                raise ValueError(f"{TIMEOUT_ENV_VAR} must be positive, got '{timeout_value}'.")

        base_url = os.getenv(BASE_URL_ENV_VAR) or DEFAULT_BASE_URL
        _validate_base_url(base_url)

        return cls(
            model=os.getenv(MODEL_ENV_VAR) or DEFAULT_MODEL,
            base_url=base_url,
            timeout_seconds=timeout_seconds,
        )


def _validate_base_url(value: str) -> None:
    """Require an absolute http(s) URL for the analysis endpoint."""
    try:
        url = httpx.URL(value)
    except httpx.InvalidURL as error:
        raise ValueError(f"{BASE_URL_ENV_VAR} must be a valid URL, got '{value}'.") from error
    if url.scheme not in {"http", "https"} or not url.host:
        raise ValueError(f"{BASE_URL_ENV_VAR} must be an absolute http(s) URL, got '{value}'.")
