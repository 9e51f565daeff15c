# SPDX-License-Identifier: MPL-2.0
"""
Provenance Base - Capture, sign and flatten provenance metadata.

This package defines the extension points through which objects describe their
own provenance and through which signing packages sign and verify it:

- producers define ``__provenance__`` or register a capture function on a
  :class:`~provenance_base.core.capture.CaptureRegistry`;
- consumers subclass :class:`~provenance_base.core.signature.SignatureScheme`.
"""

import contextlib
from importlib.metadata import version

__version__ = "0.1.0"

with contextlib.suppress(Exception):
    __version__ = version("provenance-base")


from provenance_base.core import (
    CaptureRegistry,
    NoSignature,
    ProvenanceRecord,
    Signature,
    SignatureScheme,
    StructuredData,
    construct,
    flatten,
    has_provenance,
    is_signed,
    verify,
)

__all__ = [
    "CaptureRegistry",
    "NoSignature",
    "ProvenanceRecord",
    "Signature",
    "SignatureScheme",
    "StructuredData",
    "construct",
    "flatten",
    "has_provenance",
    "is_signed",
    "verify",
    "__version__",
]
