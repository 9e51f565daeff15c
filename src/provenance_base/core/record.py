# SPDX-License-Identifier: MPL-2.0
"""Construction of provenance records."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Optional

from .capture import CaptureRegistry
from .models import ProvenanceRecord
from .signature import DEFAULT_SCHEME, SignatureScheme

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def construct(
    obj: Any,
    scheme: Optional[SignatureScheme] = None,
    registry: Optional[CaptureRegistry] = None,
    clock: Optional[Clock] = None,
) -> ProvenanceRecord:
    """Capture, timestamp and sign the provenance of ``obj``.

    Args:
        obj: The object to describe. It must not be mutated while the record
            is being constructed.
        scheme: Signature scheme to sign with. Defaults to ``NoSignature``.
        registry: Capture registry to look up producers in. Without one only
            ``__provenance__`` is consulted.
        clock: Callable returning the current time, defaults to UTC now.

    Returns:
        The new, immutable record.

    Capture happens before signing, so the scheme signs exactly the data that
    is stored in the record. Exceptions raised by capture or signing
    propagate unchanged.
    """
    if scheme is None:
        scheme = DEFAULT_SCHEME
    if registry is None:
        registry = CaptureRegistry()

    timestamp = (clock or utcnow)()
    data = registry.capture(obj)
    signature = scheme.sign(obj, timestamp, data)
    return ProvenanceRecord(signature=signature, timestamp=timestamp, data=data)


def has_provenance(record: ProvenanceRecord) -> bool:
    """Check whether ``record`` contains any usable provenance data."""
    return record.data is not None
