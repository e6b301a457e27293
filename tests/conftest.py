# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures for Airtable SDK tests.

Provides an in-memory session that replays canned responses and records every
request, so client behaviour can be asserted without network access.
"""

import json
import re
from urllib.parse import parse_qsl, unquote, urlsplit

import pytest
import requests

from airtable_sdk.client import AirtableClient
from airtable_sdk.core.config import AirtableConfig

BASE_ID = "appXXXX"
TOKEN = "test_token_12345"


class FakeResponse:
    """Minimal stand-in for :class:`requests.Response`."""

    def __init__(self, status_code=200, body=None, headers=None):
        self.status_code = status_code
        self.headers = headers or {}
        if isinstance(body, (dict, list)):
            self.text = json.dumps(body)
        else:
            self.text = body or ""

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Session replaying ``responses`` in order.

    Each entry is a :class:`FakeResponse`, a ``(status, body)`` tuple or a
    ``(status, body, headers)`` tuple. Requests are recorded in ``calls`` with
    the Authorization header the auth hook produced.
    """

    def __init__(self, responses=None):
        self._responses = list(responses or [])
        self.calls = []
        self.auth = None
        self.closed = False

    def request(self, method, url, headers=None, **kwargs):
        prepared = requests.PreparedRequest()
        prepared.prepare_headers(headers or {})
        if self.auth is not None:
            prepared = self.auth(prepared)
        self.calls.append(
            {
                "method": method,
                "url": url,
                "headers": dict(prepared.headers),
                "json": kwargs.get("json"),
                "timeout": kwargs.get("timeout"),
            }
        )
        if not self._responses:
            raise AssertionError(f"No more responses for {method} {url}")
        item = self._responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        if isinstance(item, FakeResponse):
            return item
        return FakeResponse(*item)

    def close(self):
        self.closed = True


def record_payload(record_id, **fields):
    return {"id": record_id, "fields": fields, "createdTime": "2024-01-01T00:00:00.000Z"}


@pytest.fixture
def config():
    """Configuration with default URLs, independent of the environment."""
    return AirtableConfig()


@pytest.fixture
def make_client(config):
    """Factory returning ``(client, session)`` for a list of canned responses."""

    def _make(responses=None, **kwargs):
        session = FakeSession(responses)
        client = AirtableClient(TOKEN, BASE_ID, config=config, session=session, **kwargs)
        return client, session

    return _make


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def record():
    """Factory for record payloads as the API returns them."""
    return record_payload


class InMemoryAirtable(FakeSession):
    """Session emulating one base of the record API in memory.

    Supports list (equality ``filterByFormula`` only, paginated by
    ``page_size``), get, create, PUT, PATCH and DELETE. Queued ``responses``
    take precedence over the emulation; ``failures`` maps
    ``(method, record_id)`` to a canned response for targeted errors.
    """

    _PAIR = re.compile(r"\{([^}]*)\}='((?:[^'\\]|\\.)*)'")

    def __init__(self, base=BASE_ID, page_size=2, responses=None):
        super().__init__(responses)
        self.base = base
        self.page_size = page_size
        self.tables = {}
        self._next_id = 1
        self.failures = {}

    def add(self, table, **fields):
        record_id = f"rec{self._next_id:03d}"
        self._next_id += 1
        self.tables.setdefault(table, {})[record_id] = dict(fields)
        return record_id

    def request(self, method, url, headers=None, **kwargs):
        if self._responses:
            return super().request(method, url, headers=headers, **kwargs)
        self._responses.append(self._handle(method.upper(), url, kwargs.get("json")))
        return super().request(method, url, headers=headers, **kwargs)

    def _payload(self, record_id, fields):
        return {"id": record_id, "fields": dict(fields), "createdTime": "2024-01-01T00:00:00.000Z"}

    def _handle(self, method, url, body):
        parts = urlsplit(url)
        segments = parts.path.split("/")
        table = unquote(segments[3])
        record_id = segments[4] if len(segments) > 4 else None
        rows = self.tables.setdefault(table, {})
        query = dict(parse_qsl(parts.query, keep_blank_values=True))

        if (method, record_id) in self.failures:
            return self.failures[(method, record_id)]

        if record_id is not None and record_id not in rows:
            return FakeResponse(404, {"error": "NOT_FOUND"})
        if method == "GET" and record_id:
            return FakeResponse(200, self._payload(record_id, rows[record_id]))
        if method == "GET":
            criteria = [
                (name, value.replace("\\'", "'"))
                for name, value in self._PAIR.findall(query.get("filterByFormula", ""))
            ]
            matches = [
                self._payload(rid, fields)
                for rid, fields in rows.items()
                if all(str(fields.get(name, "")) == value for name, value in criteria)
            ]
            start = int(query.get("offset", "itr0")[3:])
            page = {"records": matches[start : start + self.page_size]}
            if start + self.page_size < len(matches):
                page["offset"] = f"itr{start + self.page_size}"
            return FakeResponse(200, page)
        if method == "POST":
            if "records" in body:
                created = [self.add(table, **item["fields"]) for item in body["records"]]
                return FakeResponse(200, {"records": [self._payload(rid, rows[rid]) for rid in created]})
            rid = self.add(table, **body["fields"])
            return FakeResponse(200, self._payload(rid, rows[rid]))
        if method == "PUT":
            rows[record_id] = dict(body["fields"])
            return FakeResponse(200, self._payload(record_id, rows[record_id]))
        if method == "PATCH":
            rows[record_id].update(body["fields"])
            return FakeResponse(200, self._payload(record_id, rows[record_id]))
        if method == "DELETE":
            del rows[record_id]
            return FakeResponse(200, {"id": record_id, "deleted": True})
        return FakeResponse(405, {"error": {"type": "METHOD_NOT_ALLOWED", "message": method}})


@pytest.fixture
def airtable(config):
    """``(client, server)`` backed by :class:`InMemoryAirtable`."""
    server = InMemoryAirtable()
    client = AirtableClient(TOKEN, BASE_ID, config=config, session=server)
    return client, server
