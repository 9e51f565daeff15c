# SPDX-License-Identifier: MPL-2.0
"""Core functionality for provenance capture, signing and flattening."""
from provenance_base.core.capture import CaptureRegistry, SupportsProvenance, provenance
from provenance_base.core.flatten import flatten, join_paths
from provenance_base.core.models import ProvenanceRecord, StructuredData
from provenance_base.core.record import construct, has_provenance
from provenance_base.core.signature import (
    NO_SIGNATURE,
    NoSignature,
    Signature,
    SignatureScheme,
    is_signed,
    verify,
)

__all__ = [
    "CaptureRegistry",
    "SupportsProvenance",
    "provenance",
    "flatten",
    "join_paths",
    "ProvenanceRecord",
    "StructuredData",
    "construct",
    "has_provenance",
    "NO_SIGNATURE",
    "NoSignature",
    "Signature",
    "SignatureScheme",
    "is_signed",
    "verify",
]
