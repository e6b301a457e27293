# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Utility helpers for the Airtable SDK.

- :func:`records_to_dataframe`: convert fetched records into a pandas DataFrame.
- :func:`dataframe_to_records`: convert DataFrame rows into field mappings.
"""

from ._pandas import dataframe_to_records, records_to_dataframe

__all__ = ["dataframe_to_records", "records_to_dataframe"]
