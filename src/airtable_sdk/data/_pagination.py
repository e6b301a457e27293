# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Cursor-driven pagination over list endpoints."""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional
from urllib.parse import quote

from ..core._guard import guard_response
from ..core._http import _HttpClient
from ..core.errors import MalformedResponseError
from ..models.record import Record
from ._endpoints import append_query

_LOGGER = logging.getLogger(__name__)


def iter_pages(http: _HttpClient, url: str, *, base: Optional[str], table: Optional[str]) -> Iterator[List[Record]]:
    """Iterate a list endpoint, yielding one page of records at a time.

    The first request goes to ``url``; each following one appends the
    ``offset`` cursor returned by the previous page. Iteration stops on a page
    without records or without a continuation cursor.

    Parameters
    ----------
    http : _HttpClient
        Transport used for the GET requests.
    url : str
        Fully built list URL, query string included.
    base, table : str | None
        Identifiers used in error messages.

    Yields
    ------
    list[Record]
        Records of one page, in server order.
    """
    offset: Optional[str] = None
    page = 0
    while True:
        page_url = append_query(url, f"offset={quote(offset, safe='/')}") if offset else url
        data = guard_response(http._request("get", page_url), base=base, table=table)
        page += 1
        items = data.get("records") if isinstance(data, dict) else None
        if not items:
            _LOGGER.debug("Page %d of %s:%s is empty, stopping", page, base, table)
            return
        if not isinstance(items, list):
            raise MalformedResponseError(
                f'"records" on "{base}:{table}" is not a list.',
                details={"page": page},
            )
        yield [Record.from_api_response(item) for item in items]
        cursor = data.get("offset")
        offset = cursor if isinstance(cursor, str) and cursor else None
        if offset is None:
            return


def paginate(http: _HttpClient, url: str, *, base: Optional[str], table: Optional[str]) -> List[Record]:
    """Collect every page of :func:`iter_pages` into one list."""
    records: List[Record] = []
    for chunk in iter_pages(http, url, base=base, table=table):
        records.extend(chunk)
    return records
