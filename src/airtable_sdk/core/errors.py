# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured exceptions raised by the Airtable SDK.

Every error derives from :class:`AirtableError`, which carries a stable
``code``/``subcode`` pair and a ``to_dict()`` view for logging. HTTP-level
failures derive from :class:`HttpError`.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Optional

from . import _error_codes as codes


class AirtableError(Exception):
    """Base structured error for the Airtable SDK."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
        is_transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.is_transient = is_transient
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "is_transient": self.is_transient,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class NotFoundError(AirtableError):
    """No record matched where exactly one was required."""

    def __init__(
        self,
        message: str,
        *,
        code: str = codes.NOT_FOUND,
        subcode: Optional[str] = codes.RECORD_NOT_FOUND,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code=code, subcode=subcode, details=details)


class MalformedResponseError(NotFoundError):
    """A payload could not be decoded into the expected shape.

    Subclasses :class:`NotFoundError`: a single-record fetch without ``id`` or
    ``fields`` means the record could not be found.
    """

    def __init__(
        self,
        message: str,
        *,
        subcode: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code=codes.MALFORMED_RESPONSE, subcode=subcode, details=details)


class AmbiguousResultError(AirtableError):
    """More than one record matched where exactly one was required."""

    def __init__(self, message: str, *, count: int, details: Optional[Dict[str, Any]] = None) -> None:
        d = dict(details or {})
        d["count"] = count
        super().__init__(message, code=codes.AMBIGUOUS_RESULT, details=d)
        self.count = count


class HttpError(AirtableError):
    def __init__(
        self,
        message: str,
        status_code: int,
        is_transient: bool = False,
        subcode: Optional[str] = None,
        error_type: Optional[str] = None,
        body_excerpt: Optional[str] = None,
        retry_after: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        d = details or {}
        if error_type is not None:
            d["error_type"] = error_type
        if body_excerpt is not None:
            d["body_excerpt"] = body_excerpt
        if retry_after is not None:
            d["retry_after"] = retry_after
        super().__init__(
            message,
            code=codes.HTTP_ERROR,
            subcode=subcode or codes.http_subcode(status_code),
            status_code=status_code,
            details=d,
            source="server",
            is_transient=is_transient,
        )


class ApiError(HttpError):
    """Any non-200 response other than 429."""

    def __init__(
        self,
        status_code: int,
        table: Optional[str],
        message: str,
        *,
        base: Optional[str] = None,
        error_type: Optional[str] = None,
        body_excerpt: Optional[str] = None,
    ) -> None:
        super().__init__(
            f'An "{status_code}" error occurred on "{base}:{table}": {message}',
            status_code,
            is_transient=status_code >= 500,
            error_type=error_type,
            body_excerpt=body_excerpt,
            details={"table": table, "base": base},
        )
        self.table = table
        self.base = base
        self.server_message = message
        self.error_type = error_type


class RateLimitedError(HttpError):
    """HTTP 429: the per-base request rate was exceeded."""

    def __init__(self, base: Optional[str], table: Optional[str], *, retry_after: Optional[int] = None) -> None:
        super().__init__(
            f'Rate limit reached on "{base}:{table}".',
            429,
            is_transient=True,
            subcode=codes.HTTP_429,
            retry_after=retry_after,
            details={"table": table, "base": base},
        )
        self.table = table
        self.base = base
        self.retry_after = retry_after


__all__ = [
    "AirtableError",
    "NotFoundError",
    "MalformedResponseError",
    "AmbiguousResultError",
    "HttpError",
    "ApiError",
    "RateLimitedError",
]
