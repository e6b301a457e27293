# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for AirtableClient context manager support."""

import unittest
from unittest.mock import MagicMock

import requests

from airtable_sdk.client import AirtableClient
from airtable_sdk.core._http import BearerTokenAuth, _HttpClient
from airtable_sdk.core.config import AirtableConfig


class TestContextManager(unittest.TestCase):
    """Test context manager support on AirtableClient."""

    def setUp(self):
        self.config = AirtableConfig()

    def test_transport_created_lazily(self):
        client = AirtableClient("tok", "appXXXX", config=self.config)
        self.assertIsNone(client._http)

    def test_enter_creates_transport(self):
        client = AirtableClient("tok", "appXXXX", config=self.config)
        result = client.__enter__()
        self.assertIs(result, client)
        self.assertIsInstance(client._http, _HttpClient)
        self.assertIsInstance(client._http.session, requests.Session)
        self.assertEqual(client._http.session.auth, BearerTokenAuth("tok"))
        client.close()

    def test_context_manager_protocol(self):
        with AirtableClient("tok", "appXXXX", config=self.config) as client:
            session = client._http.session
            session.close = MagicMock()
        session.close.assert_called_once()
        self.assertIsNone(client._http)

    def test_close_idempotent(self):
        client = AirtableClient("tok", "appXXXX", config=self.config)
        client.__enter__()
        client.close()
        client.close()
        self.assertIsNone(client._http)

    def test_close_without_enter(self):
        client = AirtableClient("tok", "appXXXX", config=self.config)
        client.close()
        self.assertIsNone(client._http)

    def test_injected_session_not_closed(self):
        session = MagicMock(spec=requests.Session)
        with AirtableClient("tok", "appXXXX", config=self.config, session=session):
            pass
        session.close.assert_not_called()
        self.assertEqual(session.auth, BearerTokenAuth("tok"))

    def test_exception_propagates(self):
        with self.assertRaises(ValueError):
            with AirtableClient("tok", "appXXXX", config=self.config) as client:
                raise ValueError("boom")
        self.assertIsNone(client._http)


if __name__ == "__main__":
    unittest.main()
