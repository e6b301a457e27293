# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union, TYPE_CHECKING
from urllib.parse import quote

import pandas as pd
import requests

from .core._guard import guard_response
from .core._http import _HttpClient
from .core.config import AirtableConfig
from .core.errors import AmbiguousResultError, MalformedResponseError, NotFoundError
from .data._endpoints import append_query, build_endpoint, build_meta_endpoint
from .data._pagination import paginate
from .models.formula import equality_formula, formula_query, search_formula
from .models.record import Record
from .utils._pandas import dataframe_to_records

if TYPE_CHECKING:
    from .table import TableManipulator

_LOGGER = logging.getLogger(__name__)

# Airtable accepts at most 10 records per batch create request.
BATCH_SIZE = 10

Fields = Mapping[str, Any]
Criteria = Mapping[str, Any]


class AirtableClient:
    """
    High-level client for the Airtable record API.

    The client owns an HTTP transport whose session carries a bearer auth hook,
    so every outgoing request is authenticated without per-call handling. The
    same timeout applies to every request. Errors are never retried: HTTP
    failures surface as :class:`~airtable_sdk.core.errors.HttpError` subclasses
    and transport failures as :mod:`requests` exceptions.

    **Context Manager Support (Recommended)**::

            with AirtableClient(token, "appXXXX") as client:
                record = client.create_record("Tasks", {"Name": "Write docs"})
            # Session closed

    **Threading**:
        An instance is single-owner. :class:`requests.Session` is not documented
        as thread-safe, so threads must not share a client; create one per thread.

    :param access_token: Personal access token sent as ``Authorization: Bearer``.
    :type access_token: :class:`str`
    :param base: Base id, e.g. ``"appXXXXXXXXXXXXXX"``.
    :type base: :class:`str`
    :param timeout: Timeout in seconds for every request. Defaults to
        ``config.http_timeout`` (10 seconds).
    :type timeout: :class:`float` | None
    :param config: Optional configuration. Defaults to :meth:`AirtableConfig.from_env`.
    :type config: ~airtable_sdk.core.config.AirtableConfig | None
    :param session: Optional :class:`requests.Session` to send requests through.
        Its ``auth`` is replaced by the bearer hook; the client does not close it.
    :type session: :class:`requests.Session` | None

    :raises ValueError: If ``access_token`` or ``base`` is empty.

    Example::

        client = AirtableClient(token, "appXXXX")
        try:
            client.update_record("Tasks", {"Name": "Write docs"}, {"Status": "Done"})
            for record in client.find_records("Tasks", {"Status": "Done"}):
                print(record.id, record["Name"])
        finally:
            client.close()
    """

    def __init__(
        self,
        access_token: str,
        base: str,
        timeout: Optional[float] = None,
        *,
        config: Optional[AirtableConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not access_token:
            raise ValueError("access_token is required.")
        if not base:
            raise ValueError("base is required.")
        self._access_token = access_token
        self._base = base
        self._config = config or AirtableConfig.from_env()
        self._timeout = float(timeout) if timeout is not None else self._config.http_timeout
        self._session = session
        self._http: Optional[_HttpClient] = None

    @classmethod
    def from_env(cls, *, config: Optional[AirtableConfig] = None, session: Optional[requests.Session] = None) -> "AirtableClient":
        """
        Build a client from ``AIRTABLE_ACCESS_TOKEN`` and ``AIRTABLE_BASE_ID``.

        :raises ValueError: If either variable is unset.
        """
        token = os.environ.get("AIRTABLE_ACCESS_TOKEN")
        base = os.environ.get("AIRTABLE_BASE_ID")
        if not token or not base:
            raise ValueError("AIRTABLE_ACCESS_TOKEN and AIRTABLE_BASE_ID must be set.")
        return cls(token, base, config=config, session=session)

    @property
    def base(self) -> str:
        return self._base

    @property
    def timeout(self) -> float:
        return self._timeout

    def __enter__(self) -> "AirtableClient":
        self._get_http()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """
        Close the transport and release the session the client created.

        Safe to call multiple times.
        """
        if self._http is not None:
            self._http.close()
            self._http = None

    def _get_http(self) -> _HttpClient:
        """Get or lazily create the transport."""
        if self._http is None:
            self._http = _HttpClient(
                self._access_token,
                self._timeout,
                session=self._session,
                user_agent=self._config.user_agent,
            )
        return self._http

    def _send(self, method: str, url: str, table: Optional[str], **kwargs: Any) -> Any:
        response = self._get_http()._request(method, url, **kwargs)
        return guard_response(response, base=self._base, table=table)

    def _list(self, table: str, url: str) -> List[Record]:
        return paginate(self._get_http(), url, base=self._base, table=table)

    # ------------------------------------------------------------- endpoints

    def endpoint(self, table: str, record_id: Optional[str] = None) -> str:
        """
        Return the URL of a table, or of one record when ``record_id`` is given.

        Example::

            client.endpoint("Tasks")            # https://api.airtable.com/v0/appXXXX/Tasks
            client.endpoint("Tasks", "rec123")  # https://api.airtable.com/v0/appXXXX/Tasks/rec123
        """
        return build_endpoint(self._config.api_url, self._base, table, record_id)

    def create_table_manipulator(self, table: str) -> "TableManipulator":
        """Return a view of this client bound to ``table``."""
        from .table import TableManipulator

        return TableManipulator(self, table)

    # ---------------------------------------------------------------- create

    def create_record(self, table: str, fields: Fields, typecast: bool = False) -> Record:
        """
        Create one record.

        :param table: Table name or id.
        :param fields: Field values of the new record.
        :param typecast: Let Airtable convert string values to the field types.
        :return: The created record.
        :rtype: ~airtable_sdk.models.record.Record
        """
        body: Dict[str, Any] = {"fields": dict(fields)}
        if typecast:
            body["typecast"] = True
        payload = self._send("post", self.endpoint(table), table, json=body)
        return Record.from_api_response(payload)

    def create_records(
        self,
        table: str,
        records: Union[Sequence[Fields], pd.DataFrame],
        typecast: bool = False,
    ) -> List[Record]:
        """
        Create several records, sending batches of ten sequentially.

        :param table: Table name or id.
        :param records: Field mappings, or a DataFrame whose rows are field mappings.
        :param typecast: Let Airtable convert string values to the field types.
        :return: Created records in input order.
        :rtype: list[~airtable_sdk.models.record.Record]

        A failing batch aborts the remaining ones; earlier batches stay created.
        """
        if isinstance(records, pd.DataFrame):
            items = dataframe_to_records(records)
        else:
            items = [dict(fields) for fields in records]
        created: List[Record] = []
        url = self.endpoint(table)
        for start in range(0, len(items), BATCH_SIZE):
            body: Dict[str, Any] = {"records": [{"fields": fields} for fields in items[start : start + BATCH_SIZE]]}
            if typecast:
                body["typecast"] = True
            payload = self._send("post", url, table, json=body)
            entries = payload.get("records") if isinstance(payload, dict) else None
            if not isinstance(entries, list):
                raise MalformedResponseError(f'Batch create on "{self._base}:{table}" returned no records.')
            created.extend(Record.from_api_response(entry) for entry in entries)
        _LOGGER.debug("Created %d records in %s:%s", len(created), self._base, table)
        return created

    # ------------------------------------------------------------------ read

    def get_record(self, table: str, record_id: str) -> Record:
        """
        Fetch one record by id.

        :raises ~airtable_sdk.core.errors.MalformedResponseError: If the payload
            lacks ``id`` or ``fields``. This is a :class:`NotFoundError`.
        :raises ~airtable_sdk.core.errors.ApiError: On a non-200 response.
        """
        payload = self._send("get", self.endpoint(table, record_id), table)
        try:
            return Record.from_api_response(payload)
        except MalformedResponseError as exc:
            raise MalformedResponseError(
                f"No records have been found from '{self._base}:{table}:{record_id}'.",
                subcode=exc.subcode,
                details={"id": record_id, "table": table},
            ) from exc

    def find_records(self, table: str, criteria: Optional[Criteria] = None, view: str = "") -> List[Record]:
        """
        Return every record whose fields equal all of ``criteria``.

        Pages are followed until the server stops returning an ``offset``.
        An empty or missing ``criteria`` returns the whole table.

        Example::

            done = client.find_records("Tasks", {"Status": "Done", "Due Date": "2024-01-01"})
        """
        url = self.endpoint(table)
        url = append_query(url, formula_query(equality_formula(criteria)) if criteria else "")
        if view:
            url = append_query(url, f"view={quote(view, safe='')}")
        return self._list(table, url)

    def find_records_by_formula(self, table: str, formula: str, view: str = "") -> List[Record]:
        """
        Return every record matching a raw Airtable formula.

        The formula is percent-encoded before it is placed in the URL.

        Example::

            overdue = client.find_records_by_formula("Tasks", "IS_BEFORE({Due}, TODAY())")
        """
        url = self.endpoint(table)
        if formula:
            url = append_query(url, formula_query(quote(formula, safe="")))
        if view:
            url = append_query(url, f"view={quote(view, safe='')}")
        return self._list(table, url)

    def find_record(self, table: str, criteria: Criteria) -> Optional[Record]:
        """
        Return the single record matching ``criteria``, or ``None``.

        :raises ~airtable_sdk.core.errors.AmbiguousResultError: If more than one record matches.
        """
        records = self.find_records(table, criteria)
        if len(records) > 1:
            raise AmbiguousResultError(
                f"More than one records have been found from '{self._base}:{table}'.",
                count=len(records),
                details={"table": table},
            )
        return records[0] if records else None

    def contains_record(self, table: str, criteria: Criteria) -> bool:
        return self.find_record(table, criteria) is not None

    def search_records(
        self,
        table: str,
        fields: Iterable[str],
        search_term: str,
        criteria: str = "",
        view: str = "",
        max_rows: int = 5,
    ) -> List[Record]:
        """
        Return records where any of ``fields`` contains ``search_term``.

        :param fields: Names of the fields to search.
        :param search_term: Text looked up with ``FIND()``.
        :param criteria: Optional raw formula ANDed with the search.
        :param view: Optional view name.
        :param max_rows: ``maxRecords`` sent to the API.
        """
        url = append_query(self.endpoint(table), f"cellFormat=json&maxRecords={int(max_rows)}")
        if view:
            url = append_query(url, f"view={quote(view, safe='')}")
        formula = search_formula(list(fields), search_term, criteria)
        if formula:
            url = append_query(url, formula_query(formula))
        return self._list(table, url)

    def get_base(self) -> Any:
        """Return the raw base metadata, collaborators and invite links included."""
        return self._send("get", build_meta_endpoint(self._config.meta_url, self._base), None)

    # ---------------------------------------------------------------- update

    def _require_record(self, table: str, criteria: Criteria) -> Record:
        record = self.find_record(table, criteria)
        if record is None:
            raise NotFoundError("Record not found", details={"table": table, "criteria": dict(criteria)})
        return record

    def set_record(self, table: str, criteria: Criteria, fields: Fields) -> Record:
        """
        Replace every field of the record matching ``criteria`` (PUT).

        Fields not included in ``fields`` are cleared.

        :raises ~airtable_sdk.core.errors.NotFoundError: If no record matches.
        :raises ~airtable_sdk.core.errors.AmbiguousResultError: If several records match.
        """
        record = self._require_record(table, criteria)
        payload = self._send("put", self.endpoint(table, record.id), table, json={"fields": dict(fields)})
        return Record.from_api_response(payload)

    def update_record(self, table: str, criteria: Criteria, fields: Fields) -> Record:
        """
        Update some fields of the record matching ``criteria`` (PATCH).

        Fields not included in ``fields`` are left untouched.

        :raises ~airtable_sdk.core.errors.NotFoundError: If no record matches.
        :raises ~airtable_sdk.core.errors.AmbiguousResultError: If several records match.
        """
        record = self._require_record(table, criteria)
        return self.update_record_by_id(table, record.id, fields)

    def update_record_by_id(self, table: str, record_id: str, fields: Fields) -> Record:
        payload = self._send("patch", self.endpoint(table, record_id), table, json={"fields": dict(fields)})
        return Record.from_api_response(payload)

    # ---------------------------------------------------------------- delete

    def delete_record(self, table: str, criteria: Criteria) -> Dict[str, Any]:
        """
        Delete the record matching ``criteria``.

        :return: The API payload, e.g. ``{"id": "rec123", "deleted": True}``.
        :raises ~airtable_sdk.core.errors.NotFoundError: If no record matches.
        """
        record = self._require_record(table, criteria)
        return self._send("delete", self.endpoint(table, record.id), table)

    def delete_records(self, table: str, criteria: Criteria) -> None:
        """
        Delete every record matching ``criteria``, one request per record.

        The first failure aborts the loop; records deleted before it stay deleted.
        """
        self._delete_each(table, self.find_records(table, criteria))

    def flush_records(self, table: str) -> None:
        """Delete every record of ``table``. Same failure semantics as :meth:`delete_records`."""
        self._delete_each(table, self.find_records(table))

    def _delete_each(self, table: str, records: Iterable[Optional[Record]]) -> None:
        count = 0
        for record in records:
            if record is None:
                raise NotFoundError("Record not found", details={"table": table})
            self._send("delete", self.endpoint(table, record.id), table)
            count += 1
        _LOGGER.debug("Deleted %d records from %s:%s", count, self._base, table)


__all__ = ["AirtableClient", "BATCH_SIZE"]
