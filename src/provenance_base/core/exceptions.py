# SPDX-License-Identifier: MPL-2.0
"""Custom exceptions for the provenance protocol.

Failures raised by producer ``capture`` code or by consumer signature schemes
are never wrapped in these types; they propagate to the caller unchanged.
The classes here cover the conditions the protocol itself detects.
"""

from typing import Any, Dict, Optional


class ProvenanceError(Exception):
    """Base exception for all provenance errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the exception.

        Args:
            message: Error message
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class MissingCapabilityError(ProvenanceError, NotImplementedError):
    """Raised when a signature scheme does not define a required operation."""

    def __init__(
        self,
        scheme: str,
        operation: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            f"Signature scheme {scheme!r} does not implement {operation!r}", details
        )
        self.scheme = scheme
        self.operation = operation


class CapabilityUnavailableError(ProvenanceError):
    """Raised when a scheme lacks the material needed to run an operation."""

    pass


class InvalidProvenanceDataError(ProvenanceError, TypeError):
    """Raised when captured provenance data does not have a valid shape."""

    pass


class RegistryError(ProvenanceError):
    """Base exception for capture registry errors."""

    pass


class RegistryFrozenError(RegistryError):
    """Raised when registering on a registry that has been frozen."""

    pass


class CanonicalizationError(ProvenanceError, ValueError):
    """Raised when data cannot be canonicalized."""

    pass


class ConfigurationError(ProvenanceError):
    """Raised when configuration is invalid or missing."""

    pass
