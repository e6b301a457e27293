# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""URL construction for the record and metadata APIs."""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from ..core.config import DEFAULT_API_URL, DEFAULT_META_URL

_BASE_INCLUDES = ("collaborators", "inviteLinks")


def build_endpoint(api_url: str, base: str, table: str, record_id: Optional[str] = None) -> str:
    """
    Return ``{api_url}/{base}/{table}[/{record_id}]``.

    The table name is percent-encoded; base and record id are inserted verbatim.

    Example::

        build_endpoint("https://api.airtable.com/v0", "appXXXX", "Tasks", "rec123")
        # "https://api.airtable.com/v0/appXXXX/Tasks/rec123"
    """
    root = (api_url or DEFAULT_API_URL).rstrip("/")
    url = f"{root}/{base}/{quote(table, safe='')}"
    if record_id:
        url += f"/{record_id}"
    return url


def build_meta_endpoint(meta_url: str, base: str) -> str:
    """Return the base metadata URL including collaborators and invite links."""
    root = (meta_url or DEFAULT_META_URL).rstrip("/")
    includes = "&".join(f"include={name}" for name in _BASE_INCLUDES)
    return f"{root}/bases/{base}?{includes}"


def append_query(url: str, fragment: str) -> str:
    """Append ``fragment`` using ``?`` or ``&`` depending on whether ``url`` has a query."""
    if not fragment:
        return url
    return f"{url}{'&' if '?' in url else '?'}{fragment}"
