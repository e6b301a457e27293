# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data models and formula builders for the Airtable SDK.

- :class:`~airtable_sdk.models.record.Record`: immutable record with dict-like read access.
- :mod:`~airtable_sdk.models.formula`: ``filterByFormula`` builders.

Import directly from the specific module files.
"""

__all__ = []
