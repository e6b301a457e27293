# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the Airtable SDK.

This package contains the configuration, HTTP transport, response guard and
error types shared by the client.
"""

__all__ = []
