# SPDX-License-Identifier: MPL-2.0
"""Signature schemes backed by the ``cryptography`` library.

Two schemes are provided:

* :class:`DigestSignature` stores a SHA-256 digest of the signing payload. It
  detects accidental changes but offers no authenticity, since anyone can
  recompute the digest.
* :class:`Ed25519Signature` signs the payload with an Ed25519 key. A scheme
  holding only a public key can verify records but refuses to sign them.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Optional, cast

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519

from ..canonicalization import signing_payload
from ..exceptions import CapabilityUnavailableError
from ..models import ProvenanceRecord, StructuredData
from ..signature import Signature, SignatureScheme

logger = logging.getLogger(__name__)


def _b64u(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64u_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def hash_sha256(data: bytes) -> bytes:
    """Return the SHA-256 digest of ``data``."""

    return hashlib.sha256(data).digest()


@dataclass
class KeyPair:
    """Represents an Ed25519 key pair.

    ``private_key`` is ``None`` for keys loaded from public material only;
    such keys can verify but not sign.
    """

    public_key: ed25519.Ed25519PublicKey
    private_key: Optional[ed25519.Ed25519PrivateKey] = None
    kid: str = field(default_factory=lambda: f"key-{os.urandom(8).hex()}")

    DOMAIN: ClassVar[bytes] = b"provenance-base-v1"

    @classmethod
    def generate(cls, kid: Optional[str] = None) -> KeyPair:
        """Generate a new key pair.

        Args:
            kid: Optional key identifier.  If omitted, a random identifier is
                generated.
        """

        private_key = ed25519.Ed25519PrivateKey.generate()
        return cls(
            public_key=private_key.public_key(),
            private_key=private_key,
            kid=kid or f"key-{os.urandom(8).hex()}",
        )

    @property
    def can_sign(self) -> bool:
        return self.private_key is not None

    def sign(self, data: bytes) -> bytes:
        """Sign data with the private key."""
        if self.private_key is None:
            raise CapabilityUnavailableError(
                f"Key {self.kid!r} has no private key material",
                {"kid": self.kid},
            )
        return cast("bytes", self.private_key.sign(self.DOMAIN + data))

    def verify(self, data: bytes, signature: bytes) -> bool:
        """Verify a signature."""
        try:
            self.public_key.verify(signature, self.DOMAIN + data)
        except InvalidSignature:
            return False
        else:
            return True

    def public_bytes(self) -> bytes:
        """Get the public key as bytes."""
        return cast(
            "bytes",
            self.public_key.public_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PublicFormat.Raw,
            ),
        )

    def public_only(self) -> KeyPair:
        """Return a copy of this key pair without the private key."""
        return KeyPair(public_key=self.public_key, kid=self.kid)

    @classmethod
    def from_public_bytes(cls, public_bytes: bytes, kid: Optional[str] = None) -> KeyPair:
        """Create a verify-only KeyPair from raw public key bytes."""
        public_key = ed25519.Ed25519PublicKey.from_public_bytes(public_bytes)
        if kid is None:
            return cls(public_key=public_key)
        return cls(public_key=public_key, kid=kid)

    # ------------------------------------------------------------------
    # JWK helpers
    # ------------------------------------------------------------------
    def to_jwk(self, private: bool = False) -> dict:
        """Return the key in JSON Web Key (JWK) format.

        Args:
            private: If ``True`` include the private key material.  The default
                is ``False`` which returns only the public key.
        """

        jwk = {
            "kty": "OKP",
            "crv": "Ed25519",
            "kid": self.kid,
            "x": _b64u(self.public_bytes()),
        }

        if private:
            if self.private_key is None:
                raise CapabilityUnavailableError(
                    f"Key {self.kid!r} has no private key material",
                    {"kid": self.kid},
                )
            private_bytes = cast(
                "bytes",
                self.private_key.private_bytes(
                    encoding=serialization.Encoding.Raw,
                    format=serialization.PrivateFormat.Raw,
                    encryption_algorithm=serialization.NoEncryption(),
                ),
            )
            jwk["d"] = _b64u(private_bytes)

        return jwk

    @classmethod
    def from_jwk(cls, jwk: dict) -> KeyPair:
        """Construct a :class:`KeyPair` from JWK data.

        A JWK without a ``d`` member yields a verify-only key pair.
        """

        if jwk.get("kty") != "OKP" or jwk.get("crv") != "Ed25519":
            raise ValueError("Unsupported JWK parameters")

        public_key = ed25519.Ed25519PublicKey.from_public_bytes(_b64u_decode(jwk["x"]))
        private_key = None
        if "d" in jwk:
            private_key = ed25519.Ed25519PrivateKey.from_private_bytes(
                _b64u_decode(jwk["d"])
            )

        kid = jwk.get("kid") or f"key-{os.urandom(8).hex()}"
        return cls(public_key=public_key, private_key=private_key, kid=kid)


class DigestSignature(SignatureScheme):
    """SHA-256 digest over the canonical signing payload."""

    name = "sha256"

    def sign(self, obj: Any, timestamp: datetime, data: Optional[StructuredData]) -> Signature:
        digest = hash_sha256(signing_payload(obj, timestamp, data))
        return Signature(scheme=self, algorithm=self.name, value=digest.hex())

    def is_signed(self, record: ProvenanceRecord) -> bool:
        return True

    def verify(self, obj: Any, record: ProvenanceRecord) -> bool:
        if record.signature.value is None:
            return False
        payload = signing_payload(obj, record.timestamp, record.data)
        expected = hash_sha256(payload).hex()
        return hmac.compare_digest(expected, record.signature.value)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, DigestSignature)

    def __hash__(self) -> int:
        return hash(DigestSignature)


class Ed25519Signature(SignatureScheme):
    """Ed25519 signatures over the canonical signing payload."""

    name = "ed25519"

    def __init__(self, key_pair: KeyPair) -> None:
        self.key_pair = key_pair

    @classmethod
    def generate(cls, kid: Optional[str] = None) -> Ed25519Signature:
        """Create a scheme with a freshly generated key pair."""
        return cls(KeyPair.generate(kid))

    def sign(self, obj: Any, timestamp: datetime, data: Optional[StructuredData]) -> Signature:
        payload = signing_payload(obj, timestamp, data)
        signature = self.key_pair.sign(payload)
        logger.debug("Signed provenance of %s with key %s", type(obj).__qualname__, self.key_pair.kid)
        return Signature(
            scheme=self,
            algorithm=self.name,
            value=_b64u(signature),
            key_id=self.key_pair.kid,
        )

    def is_signed(self, record: ProvenanceRecord) -> bool:
        return True

    def verify(self, obj: Any, record: ProvenanceRecord) -> bool:
        sig = record.signature
        if sig.value is None or sig.key_id != self.key_pair.kid:
            return False
        try:
            signature = _b64u_decode(sig.value)
        except ValueError:
            return False
        payload = signing_payload(obj, record.timestamp, record.data)
        return self.key_pair.verify(payload, signature)

    def __repr__(self) -> str:
        return f"Ed25519Signature(kid={self.key_pair.kid!r})"


__all__ = [
    "DigestSignature",
    "Ed25519Signature",
    "KeyPair",
    "hash_sha256",
]
