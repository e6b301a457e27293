# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Python client for the Airtable record API.

Example::

    from airtable_sdk import AirtableClient

    with AirtableClient(token, "appXXXX") as client:
        tasks = client.create_table_manipulator("Tasks")
        tasks.create_record({"Name": "Write docs"})
"""

import logging

from .client import AirtableClient
from .core.config import AirtableConfig
from .core.errors import (
    AirtableError,
    AmbiguousResultError,
    ApiError,
    HttpError,
    MalformedResponseError,
    NotFoundError,
    RateLimitedError,
)
from .models.record import Record
from .table import TableManipulator

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AirtableClient",
    "AirtableConfig",
    "AirtableError",
    "AmbiguousResultError",
    "ApiError",
    "HttpError",
    "MalformedResponseError",
    "NotFoundError",
    "RateLimitedError",
    "Record",
    "TableManipulator",
    "__version__",
]
