# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Builders for Airtable ``filterByFormula`` expressions.

The output is embedded verbatim into a URL query string, so every piece that
may carry reserved characters is percent-encoded here.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional
from urllib.parse import quote

FILTER_PARAM = "filterByFormula"


def escape_spaces(value: Any) -> Any:
    """
    Replace spaces with ``%20`` throughout a JSON value.

    Strings are encoded, lists and tuples are encoded item by item, mappings
    have both keys and values encoded. Other scalars are returned unchanged.

    Example::

        escape_spaces("Due Date")              # "Due%20Date"
        escape_spaces({"Due Date": ["a b"]})   # {"Due%20Date": ["a%20b"]}
    """
    if isinstance(value, str):
        return value.replace(" ", "%20")
    if isinstance(value, (list, tuple)):
        return [escape_spaces(item) for item in value]
    if isinstance(value, Mapping):
        return {escape_spaces(k): escape_spaces(v) for k, v in value.items()}
    return value


def _literal(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    text = value if isinstance(value, str) else str(value)
    return quote(text.replace("'", "\\'"), safe="")


def equality_formula(criteria: Optional[Mapping[str, Any]]) -> str:
    """
    Build ``({a}='x' AND {b}='y')`` from an equality mapping.

    Field names have their spaces encoded; values are quoted and percent-encoded.
    Returns ``""`` for empty criteria.

    Example::

        equality_formula({"Due Date": "2024-01-01"})
        # "({Due%20Date}='2024-01-01')"
    """
    if not criteria:
        return ""
    parts = [f"{{{escape_spaces(name)}}}='{_literal(value)}'" for name, value in criteria.items()]
    return "(" + " AND ".join(parts) + ")"


def search_formula(fields: Iterable[str], search_term: str, criteria: str = "") -> str:
    """
    Build an ``OR(FIND(...)>0, ...)`` expression across ``fields``.

    The OR expression is percent-encoded once as a whole. A raw ``criteria``
    fragment, when given, is percent-encoded and combined as
    ``AND(criteria,<or-expression>)``.
    """
    finds: List[str] = [f'FIND("{search_term}",{{{name}}})>0' for name in fields]
    search = quote("OR(" + ",".join(finds) + ")", safe="") if finds else ""
    if criteria and search:
        return f"AND({quote(criteria, safe='')},{search})"
    if criteria:
        return quote(criteria, safe="")
    return search


def formula_query(formula: str) -> str:
    """Return the ``filterByFormula=<formula>`` query fragment."""
    return f"{FILTER_PARAM}={formula}"


__all__ = ["escape_spaces", "equality_formula", "search_formula", "formula_query", "FILTER_PARAM"]
