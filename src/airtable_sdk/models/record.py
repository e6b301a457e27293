# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Record data model for Airtable rows.

Provides an immutable, strongly-typed representation of a record with
read-only dict-like access to its fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, ItemsView, Iterator, KeysView, Mapping, Optional, ValuesView

from ..core import _error_codes as codes
from ..core.errors import MalformedResponseError

# Type aliases for semantic clarity
RecordId = str  # e.g. "recXXXXXXXXXXXXXX"
TableName = str  # table name or id, e.g. "Tasks" or "tblXXXXXXXXXXXXXX"


@dataclass(frozen=True)
class Record:
    """
    Immutable record representation.

    :param id: Record id.
    :type id: str
    :param fields: Field values keyed by field name. Stored behind a read-only proxy.
    :type fields: Mapping[str, Any]
    :param created_time: ``createdTime`` reported by the API, if any.
    :type created_time: str | None

    Example:
        Structured access::

            record = client.get_record("Tasks", "rec123")
            print(record.id)            # "rec123"
            print(record.fields)        # read-only mapping

        Dict-like access::

            print(record["Name"])
            for name in record:
                print(name, record[name])

            if "Due Date" in record:
                print(record["Due Date"])
    """

    id: RecordId
    fields: Mapping[str, Any] = field(default_factory=dict)
    created_time: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __getitem__(self, key: str) -> Any:
        """
        Dictionary-like field access.

        :raises KeyError: If the field doesn't exist.
        """
        return self.fields[key]

    def __contains__(self, key: object) -> bool:
        return key in self.fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return (
            self.id == other.id
            and dict(self.fields) == dict(other.fields)
            and self.created_time == other.created_time
        )

    def __hash__(self) -> int:
        return hash(self.id)

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)

    def keys(self) -> KeysView[str]:
        return self.fields.keys()

    def values(self) -> ValuesView[Any]:
        return self.fields.values()

    def items(self) -> ItemsView[str, Any]:
        return self.fields.items()

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the API's record shape.

        :return: ``{"id", "fields"}`` plus ``"createdTime"`` when known.
        :rtype: dict[str, Any]
        """
        out: Dict[str, Any] = {"id": self.id, "fields": dict(self.fields)}
        if self.created_time is not None:
            out["createdTime"] = self.created_time
        return out

    @classmethod
    def from_api_response(cls, payload: Any) -> "Record":
        """
        Create a Record from a decoded API payload.

        Both ``id`` and ``fields`` must be present; a partial payload is rejected.

        :param payload: Decoded ``{"id", "fields"[, "createdTime"]}`` object.
        :return: Record instance.
        :rtype: Record
        :raises ~airtable_sdk.core.errors.MalformedResponseError: If the payload
            is not an object, ``id`` is missing or empty, or ``fields`` is missing
            or not an object.
        """
        if not isinstance(payload, Mapping):
            raise MalformedResponseError(
                f"Expected a record object, got {type(payload).__name__}.",
                subcode=codes.RECORD_MISSING_ID,
            )
        record_id = payload.get("id")
        if not isinstance(record_id, str) or not record_id:
            raise MalformedResponseError("Record payload is missing 'id'.", subcode=codes.RECORD_MISSING_ID)
        fields = payload.get("fields")
        if not isinstance(fields, Mapping):
            raise MalformedResponseError(
                f"Record payload '{record_id}' is missing 'fields'.",
                subcode=codes.RECORD_MISSING_FIELDS,
                details={"id": record_id},
            )
        created_time = payload.get("createdTime")
        return cls(
            id=record_id,
            fields=fields,
            created_time=created_time if isinstance(created_time, str) else None,
        )


__all__ = ["Record", "RecordId", "TableName"]
