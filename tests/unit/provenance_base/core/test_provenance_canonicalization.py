"""Tests for canonicalization of provenance data."""

import json
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from provenance_base.core.canonicalization import (
    CanonicalizationError,
    canonicalize,
    signing_payload,
    verify_canonical_equivalence,
)
from provenance_base.core.models import ProvenanceRecord, StructuredData
from provenance_base.core.signature import NO_SIGNATURE


TIMESTAMP = datetime(2024, 1, 2, 3, 4, 5, 600000, tzinfo=timezone.utc)


def test_canonicalization() -> None:
    """Test that canonicalization produces consistent output."""
    data = {"b": 2, "a": 1, "c": [3, 1, 2]}
    assert canonicalize(data) == '{"a":1,"b":2,"c":[3,1,2]}'


def test_structured_data_order_does_not_matter() -> None:
    assert canonicalize(StructuredData(b=1, a={"d": 2, "c": 3})) == '{"a":{"c":3,"d":2},"b":1}'
    assert verify_canonical_equivalence(StructuredData(a=1, b=2), {"b": 2, "a": 1})


def test_datetime_format() -> None:
    assert canonicalize(TIMESTAMP) == '"2024-01-02T03:04:05.6Z"'
    offset = TIMESTAMP.astimezone(timezone(timedelta(hours=2)))
    assert canonicalize(offset) == canonicalize(TIMESTAMP)


def test_nested_record() -> None:
    record = ProvenanceRecord(
        signature=NO_SIGNATURE, timestamp=TIMESTAMP, data=StructuredData(x=1)
    )
    assert canonicalize(StructuredData(inner=record)) == (
        '{"inner":{"data":{"x":1},'
        '"signature":{"algorithm":"none","key_id":null,"value":null},'
        '"timestamp":"2024-01-02T03:04:05.6Z"}}'
    )


def test_rejects_unsupported_values() -> None:
    with pytest.raises(CanonicalizationError):
        canonicalize({"x": float("nan")})
    with pytest.raises(CanonicalizationError):
        canonicalize({"x": object()})
    assert not verify_canonical_equivalence({"x": object()}, {"x": 1})


def test_signing_payload() -> None:
    payload = signing_payload([1], TIMESTAMP, StructuredData(a=1))
    assert payload == (
        b'{"data":{"a":1},"object":{"repr":"[1]","type":"builtins.list"},'
        b'"timestamp":"2024-01-02T03:04:05.6Z"}'
    )
    assert signing_payload([1], TIMESTAMP, None) != signing_payload([2], TIMESTAMP, None)


def test_equivalent_unicode_keys_stay_distinct() -> None:
    composed, decomposed = "caf\u00e9", "cafe\u0301"
    data = StructuredData({composed: "original", decomposed: "second"})
    altered = StructuredData({composed: "changed", decomposed: "second"})
    assert json.loads(canonicalize(data)) == {composed: "original", decomposed: "second"}
    assert canonicalize(data) != canonicalize(altered)


def test_extra_leaf_types() -> None:
    data = StructuredData(
        day=date(2024, 1, 2),
        amount=Decimal("10.50"),
        blob=b"\xfb\xff",
    )
    assert canonicalize(data) == '{"amount":"10.50","blob":"-_8","day":"2024-01-02"}'
    with pytest.raises(CanonicalizationError):
        canonicalize(Decimal("NaN"))
