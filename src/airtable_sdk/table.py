# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Table-scoped operations namespace."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union, TYPE_CHECKING

import pandas as pd

from .models.record import Record

if TYPE_CHECKING:
    from .client import AirtableClient


class TableManipulator:
    """
    Record operations bound to one table.

    Obtained via ``client.create_table_manipulator(table)``. Every method
    delegates to the matching :class:`~airtable_sdk.client.AirtableClient`
    method with the table argument fixed; contracts are identical.

    Example::

        tasks = client.create_table_manipulator("Tasks")
        tasks.create_record({"Name": "Write docs"})
        if tasks.contains_record({"Name": "Write docs"}):
            tasks.update_record({"Name": "Write docs"}, {"Status": "Done"})
    """

    def __init__(self, client: "AirtableClient", table: str) -> None:
        self._client = client
        self._table = table

    @property
    def client(self) -> "AirtableClient":
        return self._client

    @property
    def table(self) -> str:
        return self._table

    def create_record(self, fields: Mapping[str, Any], typecast: bool = False) -> Record:
        return self._client.create_record(self._table, fields, typecast)

    def create_records(
        self,
        records: Union[Sequence[Mapping[str, Any]], pd.DataFrame],
        typecast: bool = False,
    ) -> List[Record]:
        return self._client.create_records(self._table, records, typecast)

    def set_record(self, criteria: Mapping[str, Any], fields: Mapping[str, Any]) -> Record:
        return self._client.set_record(self._table, criteria, fields)

    def update_record(self, criteria: Mapping[str, Any], fields: Mapping[str, Any]) -> Record:
        return self._client.update_record(self._table, criteria, fields)

    def update_record_by_id(self, record_id: str, fields: Mapping[str, Any]) -> Record:
        return self._client.update_record_by_id(self._table, record_id, fields)

    def contains_record(self, criteria: Optional[Mapping[str, Any]] = None) -> bool:
        return self._client.contains_record(self._table, criteria or {})

    def flush_records(self) -> None:
        self._client.flush_records(self._table)

    def delete_record(self, criteria: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self._client.delete_record(self._table, criteria or {})

    def delete_records(self, criteria: Mapping[str, Any]) -> None:
        self._client.delete_records(self._table, criteria)

    def get_record(self, record_id: str) -> Record:
        return self._client.get_record(self._table, record_id)

    def find_record(self, criteria: Optional[Mapping[str, Any]] = None) -> Optional[Record]:
        return self._client.find_record(self._table, criteria or {})

    def find_records(self, criteria: Optional[Mapping[str, Any]] = None, view: str = "") -> List[Record]:
        return self._client.find_records(self._table, criteria, view)

    def find_records_by_formula(self, formula: str, view: str = "") -> List[Record]:
        return self._client.find_records_by_formula(self._table, formula, view)

    def search_records(
        self,
        fields: Iterable[str],
        search_term: str,
        criteria: str = "",
        view: str = "",
        max_rows: int = 5,
    ) -> List[Record]:
        return self._client.search_records(self._table, fields, search_term, criteria, view, max_rows)


__all__ = ["TableManipulator"]
