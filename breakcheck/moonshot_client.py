"""Moonshot chat-completion API wrapper and auth helpers."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import httpx
from dotenv import load_dotenv
from pydantic import ValidationError

from breakcheck.context import ReviewSettings
from breakcheck.errors import (
    EmptyResponseError,
    MalformedResponseError,
    MoonshotAuthError,
    ReviewServiceError,
    ReviewTransportError,
)
from breakcheck.prompt import ReviewRequest
from breakcheck.schema import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    MessageRole,
)

MOONSHOT_API_KEY_ENV_VAR = "MOONSHOT_API_KEY"
CHAT_COMPLETIONS_ENDPOINT = "/chat/completions"
UNREADABLE_BODY_PLACEHOLDER = "<unreadable response body>"

logger = logging.getLogger(__name__)


def get_moonshot_api_key_with_source() -> tuple[str, str]:
    """Read the Moonshot API key and return it with its environment source key."""
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    api_key = os.getenv(MOONSHOT_API_KEY_ENV_VAR)
    if api_key:
        return api_key, MOONSHOT_API_KEY_ENV_VAR

    raise MoonshotAuthError(
        f"{MOONSHOT_API_KEY_ENV_VAR} environment variable is not set. "
        f"Please set it with: export {MOONSHOT_API_KEY_ENV_VAR}=your_api_key_here"
    )


def build_review_client(
    api_key: str,
    settings: ReviewSettings,
    *,
    trust_env: bool = True,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Build an authenticated HTTP client for the chat-completion API."""
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    return httpx.Client(
        base_url=settings.base_url,
        headers=headers,
        timeout=settings.timeout_seconds,
        trust_env=trust_env,
        transport=transport,
    )


def build_completion_payload(request: ReviewRequest, settings: ReviewSettings) -> dict[str, object]:
    """Build the JSON body for one analysis call."""
    payload = ChatCompletionRequest(
        model=settings.model,
        messages=[
            ChatMessage(role=MessageRole.SYSTEM, content=request.system_prompt),
            ChatMessage(role=MessageRole.USER, content=request.user_prompt),
        ],
        temperature=settings.temperature,
    )
    return payload.model_dump(mode="json")


def _read_error_body(response: httpx.Response) -> str:
    """Return the response body for error reporting, tolerating read failures."""
    try:
        return response.text
    except (httpx.HTTPError, httpx.StreamError, UnicodeDecodeError):
        return UNREADABLE_BODY_PLACEHOLDER


def request_review(
    *,
    client: httpx.Client,
    request: ReviewRequest,
    settings: ReviewSettings,
) -> str:
    """Send ``request`` to the analysis service and return the first completion text."""
    payload = build_completion_payload(request, settings)
    logger.debug(
        "Requesting analysis of %d file(s) with model %s.",
        len(request.file_paths),
        settings.model,
    )

    try:
        response = client.post(CHAT_COMPLETIONS_ENDPOINT, json=payload)
    except httpx.TransportError as error:
        raise ReviewTransportError(f"Failed to send request to Moonshot API: {error}") from error
    except httpx.DecodingError as error:
        raise MalformedResponseError(f"Failed to decode API response: {error}") from error
    except httpx.RequestError as error:
        raise ReviewTransportError(f"Request to Moonshot API failed: {error}") from error

    if not response.is_success:
        body = _read_error_body(response)
        raise ReviewServiceError(
            f"API request failed with status {response.status_code}: {body}",
            status_code=response.status_code,
            body=body,
        )

    try:
        completion = ChatCompletionResponse.model_validate_json(response.content)
    except ValidationError as error:
        raise MalformedResponseError(f"Failed to parse API response: {error}") from error

    if not completion.choices:
        raise EmptyResponseError("No response from Moonshot API.")

    return completion.choices[0].message.content
