"""Tests for the provenance data models."""

import dataclasses
from datetime import datetime, timezone

import pytest

from provenance_base.core.exceptions import InvalidProvenanceDataError
from provenance_base.core.models import (
    ProvenanceRecord,
    StructuredData,
    ValueKind,
    kind_of,
)
from provenance_base.core.signature import NO_SIGNATURE


class TestStructuredData:
    """Test cases for StructuredData."""

    def test_nested_mappings_are_converted(self) -> None:
        data = StructuredData({"outer": {"inner": 1}})
        assert isinstance(data["outer"], StructuredData)
        assert data["outer"]["inner"] == 1

    def test_keyword_construction_preserves_order(self) -> None:
        data = StructuredData(b=2, a=1)
        assert list(data) == ["b", "a"]
        assert len(data) == 2

    def test_equals_plain_dict(self) -> None:
        data = StructuredData({"a": 1, "b": {"c": 2}})
        assert data == {"a": 1, "b": {"c": 2}}
        assert data.to_dict() == {"a": 1, "b": {"c": 2}}

    def test_attribute_access(self) -> None:
        data = StructuredData(field=1)
        assert data.field == 1
        with pytest.raises(AttributeError):
            data.missing

    def test_rejects_non_string_keys(self) -> None:
        with pytest.raises(InvalidProvenanceDataError):
            StructuredData({1: "one"})

    def test_is_read_only(self) -> None:
        data = StructuredData(a=1)
        with pytest.raises(TypeError):
            data["a"] = 2  # type: ignore[index]

    def test_coerce(self) -> None:
        data = StructuredData(a=1)
        assert StructuredData.coerce(data) is data
        assert StructuredData.coerce({"a": 1}) == data
        with pytest.raises(InvalidProvenanceDataError):
            StructuredData.coerce([("a", 1)])  # type: ignore[arg-type]


def test_record_is_frozen() -> None:
    record = ProvenanceRecord(
        signature=NO_SIGNATURE,
        timestamp=datetime.now(timezone.utc),
        data=StructuredData(a=1),
    )
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.data = None  # type: ignore[misc]


def test_kind_of() -> None:
    record = ProvenanceRecord(signature=NO_SIGNATURE, timestamp=datetime.now(timezone.utc))
    assert kind_of(None) is ValueKind.ABSENT
    assert kind_of(record) is ValueKind.RECORD
    assert kind_of(StructuredData(a=1)) is ValueKind.STRUCTURED
    assert kind_of({"a": 1}) is ValueKind.STRUCTURED
    assert kind_of(3) is ValueKind.LEAF
    assert kind_of("text") is ValueKind.LEAF
    assert kind_of([1, 2]) is ValueKind.LEAF


def test_structured_data_hash() -> None:
    assert hash(StructuredData(a=1, b=2)) == hash(StructuredData(b=2, a=1))
    with pytest.raises(TypeError):
        hash(StructuredData(tags=["x"]))


def test_record_is_hashable() -> None:
    timestamp = datetime.now(timezone.utc)
    first = ProvenanceRecord(signature=NO_SIGNATURE, timestamp=timestamp, data=StructuredData(a=1))
    second = ProvenanceRecord(signature=NO_SIGNATURE, timestamp=timestamp, data=StructuredData(a=1))
    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second}) == 1
