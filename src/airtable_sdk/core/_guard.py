# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Map one HTTP response to decoded JSON or a typed error."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Tuple

import requests

from . import _error_codes as codes
from .errors import ApiError, MalformedResponseError, RateLimitedError

_LOGGER = logging.getLogger(__name__)

_BODY_EXCERPT_LENGTH = 200


def _retry_after(response: requests.Response) -> Optional[int]:
    raw = (getattr(response, "headers", None) or {}).get("Retry-After")
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def _error_details(body: str) -> Tuple[str, Optional[str]]:
    """Extract ``(message, error_type)`` from an Airtable error body."""
    try:
        payload = json.loads(body) if body else None
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        return "No details", None
    error = payload.get("error")
    # {"error": "NOT_FOUND"} and {"error": {"type": ..., "message": ...}} both occur.
    if isinstance(error, str):
        return error, error
    if isinstance(error, dict):
        message = error.get("message")
        error_type = error.get("type")
        return (message if isinstance(message, str) and message else "No details"), (
            error_type if isinstance(error_type, str) else None
        )
    return "No details", None


def guard_response(response: requests.Response, *, base: Optional[str], table: Optional[str]) -> Any:
    """
    Return the decoded JSON body of a successful response or raise.

    :param response: Response to inspect.
    :type response: :class:`requests.Response`
    :param base: Base id, used in error messages.
    :param table: Table name, used in error messages.
    :return: Decoded JSON value; ``{}`` for an empty body.
    :raises ~airtable_sdk.core.errors.RateLimitedError: On HTTP 429.
    :raises ~airtable_sdk.core.errors.ApiError: On any other non-200 status.
    :raises ~airtable_sdk.core.errors.MalformedResponseError: If a 200 body is not JSON.
    """
    status = response.status_code
    body = response.text or ""

    if status == 429:
        _LOGGER.debug("Rate limited on %s:%s", base, table)
        raise RateLimitedError(base, table, retry_after=_retry_after(response))

    if status != 200:
        message, error_type = _error_details(body)
        _LOGGER.debug("HTTP %s on %s:%s: %s", status, base, table, message)
        raise ApiError(
            status,
            table,
            message,
            base=base,
            error_type=error_type,
            body_excerpt=body[:_BODY_EXCERPT_LENGTH] or None,
        )

    if not body.strip():
        return {}

    try:
        return json.loads(body)
    except ValueError as exc:
        raise MalformedResponseError(
            f'Response from "{base}:{table}" is not valid JSON.',
            subcode=codes.RESPONSE_NOT_JSON,
            details={"body_excerpt": body[:_BODY_EXCERPT_LENGTH]},
        ) from exc
