# SPDX-License-Identifier: MPL-2.0
"""Pluggable signing of provenance records.

A :class:`SignatureScheme` decides how the provenance captured from an object
is signed and later checked. Packages that bring in cryptographic libraries
subclass it and define all three of :meth:`~SignatureScheme.sign`,
:meth:`~SignatureScheme.is_signed` and :meth:`~SignatureScheme.verify`::

    class MyScheme(SignatureScheme):
        name = "my-scheme"

        def sign(self, obj, timestamp, data):
            return Signature(scheme=self, algorithm=self.name, value=...)

        def is_signed(self, record):
            return True

        def verify(self, obj, record):
            return ...

An operation a scheme leaves undefined raises
:class:`~provenance_base.core.exceptions.MissingCapabilityError` when called.

:class:`NoSignature` is the default. It signs nothing, reports records as
unsigned and verifies every record: it makes no integrity claim at all.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, ClassVar, Optional

from .exceptions import MissingCapabilityError

if TYPE_CHECKING:
    from .models import ProvenanceRecord, StructuredData


@dataclass(frozen=True)
class Signature:
    """A signature value produced by a :class:`SignatureScheme`."""

    scheme: SignatureScheme = field(repr=False, compare=False)
    algorithm: str
    value: Optional[str] = None
    key_id: Optional[str] = None


class SignatureScheme:
    """Base class for signature schemes."""

    name: ClassVar[str] = "abstract"

    def sign(
        self,
        obj: Any,
        timestamp: datetime,
        data: Optional[StructuredData],
    ) -> Signature:
        """Compute a verifiable signature for ``obj``, ``timestamp`` and ``data``."""
        raise MissingCapabilityError(self.name, "sign")

    def is_signed(self, record: ProvenanceRecord) -> bool:
        """Report whether ``record`` carries a real signature.

        Does not check the signature.
        """
        raise MissingCapabilityError(self.name, "is_signed")

    def verify(self, obj: Any, record: ProvenanceRecord) -> bool:
        """Check whether ``record`` was produced from ``obj``."""
        raise MissingCapabilityError(self.name, "verify")

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class NoSignature(SignatureScheme):
    """The default scheme, which does not sign data.

    Use it when no integrity or authenticity guarantees are needed, or when
    the libraries for a real scheme are not installed.
    """

    name = "none"

    def sign(
        self,
        obj: Any,
        timestamp: datetime,
        data: Optional[StructuredData],
    ) -> Signature:
        return NO_SIGNATURE

    def is_signed(self, record: ProvenanceRecord) -> bool:
        return False

    def verify(self, obj: Any, record: ProvenanceRecord) -> bool:
        return True

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NoSignature)

    def __hash__(self) -> int:
        return hash(NoSignature)


DEFAULT_SCHEME = NoSignature()
NO_SIGNATURE = Signature(scheme=DEFAULT_SCHEME, algorithm=NoSignature.name)


def is_signed(record: ProvenanceRecord) -> bool:
    """Check whether ``record`` has been signed.

    Does not verify the authenticity of the signature.
    """
    return record.signature.scheme.is_signed(record)


def verify(obj: Any, record: ProvenanceRecord) -> bool:
    """Check whether ``record`` was produced by ``obj``.

    Records signed with :class:`NoSignature` always verify.
    """
    return record.signature.scheme.verify(obj, record)
