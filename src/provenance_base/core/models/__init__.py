# SPDX-License-Identifier: MPL-2.0
"""Data models for provenance records."""
from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

from ..exceptions import InvalidProvenanceDataError

if TYPE_CHECKING:
    from ..signature import Signature

KeyPath = Tuple[str, ...]
FlatMapping = Dict[KeyPath, Any]


class StructuredData(Mapping):
    """An immutable, ordered mapping of field names to provenance values.

    Values may be leaves, nested ``StructuredData``, ``ProvenanceRecord``
    instances or ``None``. Plain mappings given as values are converted to
    ``StructuredData`` so that a producer can simply return a ``dict``.
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> None:
        items: Dict[str, Any] = {}
        for source in (fields or {}, kwargs):
            for key, value in source.items():
                if not isinstance(key, str):
                    raise InvalidProvenanceDataError(
                        "Provenance field names must be strings",
                        {"key": repr(key)},
                    )
                items[key] = _coerce(value)
        self._fields = items

    @classmethod
    def coerce(cls, value: Mapping[str, Any]) -> StructuredData:
        """Return ``value`` as ``StructuredData``, converting plain mappings."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            raise InvalidProvenanceDataError(
                f"Expected a mapping of provenance fields, got {type(value).__name__}"
            )
        return cls(value)

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __getattr__(self, name: str) -> Any:
        # Field access by attribute, e.g. ``record.data.version``.
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._fields[name]
        except KeyError:
            raise AttributeError(name) from None

    def __eq__(self, other: object) -> bool:
        return Mapping.__eq__(self, other)

    def __hash__(self) -> int:
        # Order-insensitive to match equality; unhashable leaves raise TypeError.
        return hash(frozenset(self._fields.items()))

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self._fields.items())
        return f"StructuredData({fields})"

    def to_dict(self) -> Dict[str, Any]:
        """Return a plain ``dict`` copy, converting nested structures too."""
        return {
            key: value.to_dict() if isinstance(value, StructuredData) else value
            for key, value in self._fields.items()
        }


def _coerce(value: Any) -> Any:
    if isinstance(value, Mapping) and not isinstance(value, StructuredData):
        return StructuredData(value)
    return value


@dataclass(frozen=True)
class ProvenanceRecord:
    """Timestamped, optionally signed provenance captured from an object.

    Instances are created by :func:`provenance_base.core.record.construct`
    and are never mutated afterwards.
    """

    signature: Signature
    timestamp: datetime
    data: Optional[StructuredData] = None


class ValueKind(str, Enum):
    """Kinds of values found in a provenance structure."""

    ABSENT = "absent"
    LEAF = "leaf"
    STRUCTURED = "structured"
    RECORD = "record"


def kind_of(value: Any) -> ValueKind:
    """Classify a provenance value."""
    if value is None:
        return ValueKind.ABSENT
    if isinstance(value, ProvenanceRecord):
        return ValueKind.RECORD
    if isinstance(value, Mapping):
        return ValueKind.STRUCTURED
    return ValueKind.LEAF


__all__ = [
    "FlatMapping",
    "KeyPath",
    "ProvenanceRecord",
    "StructuredData",
    "ValueKind",
    "kind_of",
]
