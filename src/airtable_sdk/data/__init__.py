# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Internal URL building and pagination helpers."""

__all__ = []
