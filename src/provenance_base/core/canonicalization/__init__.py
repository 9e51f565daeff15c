# SPDX-License-Identifier: MPL-2.0
"""Canonicalization of provenance data following JSON Canonicalization Scheme (RFC 8785).

Signature schemes sign the canonical form so that the same provenance data
always yields the same bytes, whatever the field insertion order.
"""

from __future__ import annotations

import base64
import json
import math
import unicodedata
from collections.abc import Mapping
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from ..exceptions import CanonicalizationError
from ..models import ProvenanceRecord, StructuredData


def _format_datetime(value: datetime) -> str:
    # RFC 3339 in UTC without superfluous zeros
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    iso = value.isoformat(timespec="microseconds").replace("+00:00", "Z")
    if "." in iso:
        main, rest = iso.split(".", 1)
        frac, _ = rest.split("Z")
        frac = frac.rstrip("0")
        iso = main + ("." + frac if frac else "") + "Z"
    return iso


def _normalize(value: Any) -> Any:
    """Recursively normalise a value for canonical JSON serialisation."""

    if isinstance(value, str):
        return unicodedata.normalize("NFC", value)

    if isinstance(value, bool) or value is None or isinstance(value, int):
        return value

    if isinstance(value, float):
        # RFC 8785: reject NaN/Infinity and emit the most compact form
        if not math.isfinite(value):
            raise CanonicalizationError("Non-finite float values are not allowed")
        if value.is_integer():
            return int(value)
        return float(Decimal(str(value)))

    if isinstance(value, datetime):
        return _format_datetime(value)

    if isinstance(value, date):
        return value.isoformat()

    if isinstance(value, Decimal):
        if not value.is_finite():
            raise CanonicalizationError("Non-finite decimal values are not allowed")
        return str(value)

    if isinstance(value, (bytes, bytearray)):
        # base64url without padding
        return base64.urlsafe_b64encode(bytes(value)).decode("ascii").rstrip("=")

    if isinstance(value, ProvenanceRecord):
        return {
            "data": _normalize(value.data),
            "signature": {
                "algorithm": value.signature.algorithm,
                "key_id": value.signature.key_id,
                "value": value.signature.value,
            },
            "timestamp": _format_datetime(value.timestamp),
        }

    if isinstance(value, (list, tuple)):
        return [_normalize(v) for v in value]

    if isinstance(value, Mapping):
        # Keys are kept as given: distinct field names must stay distinct.
        if any(not isinstance(k, str) for k in value):
            raise CanonicalizationError("Dictionary keys must be strings")
        return {k: _normalize(v) for k, v in value.items()}

    raise CanonicalizationError(
        f"Type {type(value)!r} is not supported for canonicalization"
    )


def canonicalize(data: Any) -> str:
    """Convert data to a canonical JSON string.

    ``StructuredData`` becomes a JSON object and nested provenance records
    become objects with ``data``, ``signature`` and ``timestamp`` members.
    Dates and datetimes become ISO 8601 strings, ``Decimal`` its exact string
    form and ``bytes`` unpadded base64url.
    """

    canonical_data = _normalize(data)
    try:
        return json.dumps(
            canonical_data,
            ensure_ascii=False,
            sort_keys=True,
            separators=(",", ":"),
            allow_nan=False,
        )
    except (TypeError, ValueError) as exc:
        raise CanonicalizationError(str(exc)) from exc


def signing_payload(obj: Any, timestamp: datetime, data: Optional[StructuredData]) -> bytes:
    """Return the bytes a signature over ``obj``, ``timestamp`` and ``data`` binds.

    The object is represented by its type and ``repr``; producers whose
    ``repr`` does not reflect their state should capture that state in
    ``data`` instead.
    """

    payload = {
        "data": data,
        "object": {
            "repr": repr(obj),
            "type": f"{type(obj).__module__}.{type(obj).__qualname__}",
        },
        "timestamp": timestamp,
    }
    return canonicalize(payload).encode("utf-8")


def verify_canonical_equivalence(a: Any, b: Any) -> bool:
    """Return True if two objects canonicalize to the same JSON string."""

    try:
        return canonicalize(a) == canonicalize(b)
    except CanonicalizationError:
        return False


__all__ = [
    "CanonicalizationError",
    "canonicalize",
    "signing_payload",
    "verify_canonical_equivalence",
]
