# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_API_URL = "https://api.airtable.com/v0"
DEFAULT_META_URL = "https://api.airtable.com/v0/meta"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class AirtableConfig:
    """
    Configuration settings for Airtable client operations.

    :param api_url: Root of the record API. Default is ``https://api.airtable.com/v0``.
    :type api_url: str
    :param meta_url: Root of the metadata API. Default is ``https://api.airtable.com/v0/meta``.
    :type meta_url: str
    :param http_timeout: Timeout in seconds applied to every request (default: 10).
    :type http_timeout: float
    :param user_agent: Optional ``User-Agent`` header sent with every request.
    :type user_agent: str or None
    """

    api_url: str = DEFAULT_API_URL
    meta_url: str = DEFAULT_META_URL
    http_timeout: float = DEFAULT_TIMEOUT
    user_agent: Optional[str] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "AirtableConfig":
        """
        Create a configuration instance from ``AIRTABLE_*`` environment variables.

        Reads ``AIRTABLE_API_URL``, ``AIRTABLE_META_URL`` and ``AIRTABLE_TIMEOUT``.
        Unset or empty variables fall back to the defaults.

        :param env: Mapping to read instead of :data:`os.environ`.
        :type env: Mapping[str, str] or None
        :return: Configuration instance.
        :rtype: ~airtable_sdk.core.config.AirtableConfig
        :raises ValueError: If ``AIRTABLE_TIMEOUT`` is not a number.
        """
        source = os.environ if env is None else env
        timeout_raw = source.get("AIRTABLE_TIMEOUT")
        timeout = DEFAULT_TIMEOUT
        if timeout_raw:
            try:
                timeout = float(timeout_raw)
            except ValueError:
                raise ValueError(f"AIRTABLE_TIMEOUT must be a number, got {timeout_raw!r}") from None
        return cls(
            api_url=(source.get("AIRTABLE_API_URL") or DEFAULT_API_URL).rstrip("/"),
            meta_url=(source.get("AIRTABLE_META_URL") or DEFAULT_META_URL).rstrip("/"),
            http_timeout=timeout,
            user_agent=source.get("AIRTABLE_USER_AGENT") or None,
        )
