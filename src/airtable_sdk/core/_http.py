# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
HTTP client with bearer authentication and uniform timeout handling.

This module provides :class:`~airtable_sdk.core._http._HttpClient`, a thin wrapper
around a :class:`requests.Session`. Authentication is attached by
:class:`BearerTokenAuth`, a ``requests`` auth hook that runs on every prepared
request, so individual calls never handle the token.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests
from requests.auth import AuthBase

_LOGGER = logging.getLogger(__name__)


class BearerTokenAuth(AuthBase):
    """Attach ``Authorization: Bearer <token>`` to every outgoing request."""

    def __init__(self, token: str) -> None:
        self._token = token

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        request.headers["Authorization"] = f"Bearer {self._token}"
        return request

    def __eq__(self, other: object) -> bool:
        return isinstance(other, BearerTokenAuth) and other._token == self._token

    def __ne__(self, other: object) -> bool:
        return not self == other

    def __repr__(self) -> str:
        return "BearerTokenAuth(token=***)"


class _HttpClient:
    """
    HTTP client with a fixed timeout and session-level authentication.

    No retry is performed: transport errors such as
    :class:`requests.exceptions.Timeout` propagate to the caller unchanged.

    :param token: Personal access token used by the bearer auth hook.
    :type token: :class:`str`
    :param timeout: Timeout in seconds applied to every request.
    :type timeout: :class:`float`
    :param session: Optional session to send requests through. When omitted a
        session is created and owned by this client.
    :type session: :class:`requests.Session` | None
    :param user_agent: Optional ``User-Agent`` header.
    :type user_agent: :class:`str` | None
    """

    def __init__(
        self,
        token: str,
        timeout: float,
        session: Optional[requests.Session] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        self.timeout = timeout
        self._owns_session = session is None
        self._session: Optional[requests.Session] = session if session is not None else requests.Session()
        self._session.auth = BearerTokenAuth(token)
        self._default_headers: Dict[str, str] = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if user_agent:
            self._default_headers["User-Agent"] = user_agent

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            raise RuntimeError("HTTP client is closed.")
        return self._session

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Send one request through the session.

        :param method: HTTP method (GET, POST, PUT, PATCH, DELETE).
        :type method: :class:`str`
        :param url: Fully built target URL, query string included.
        :type url: :class:`str`
        :param kwargs: Additional arguments passed to ``session.request()``,
            such as ``json``.
        :return: HTTP response object.
        :rtype: :class:`requests.Response`
        :raises requests.exceptions.RequestException: On transport failures.
        """
        headers = dict(self._default_headers)
        headers.update(kwargs.pop("headers", None) or {})
        kwargs.setdefault("timeout", self.timeout)
        _LOGGER.debug("Sending %s request to %s", method.upper(), url)
        response = self.session.request(method.upper(), url, headers=headers, **kwargs)
        _LOGGER.debug("Received %s from %s %s", response.status_code, method.upper(), url)
        return response

    def close(self) -> None:
        """
        Release the session if this client created it.

        Safe to call multiple times. A caller-provided session is left open.
        """
        if self._session is not None and self._owns_session:
            self._session.close()
        self._session = None
