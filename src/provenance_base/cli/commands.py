# SPDX-License-Identifier: MPL-2.0
"""
CLI command implementations for Provenance Base.
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click
from pydantic import BaseModel, ConfigDict, ValidationError

from provenance_base.core.crypto import KeyPair
from provenance_base.core.models import StructuredData


class JsonWebKey(BaseModel):
    """An Ed25519 key in JWK format."""

    model_config = ConfigDict(extra="forbid")

    kty: str
    crv: str
    kid: str
    x: str
    d: Optional[str] = None


class JsonDocument:
    """A JSON document whose top-level object is its own provenance."""

    def __init__(self, path: Path, content: Dict[str, Any]) -> None:
        self.path = path
        self.content = content

    def __provenance__(self) -> Dict[str, Any]:
        return self.content

    def __repr__(self) -> str:
        return f"JsonDocument({str(self.path)!r})"


def load_document(file_path: str) -> JsonDocument:
    """Load a JSON object from a file."""
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            content = json.load(f)
    except json.JSONDecodeError as e:
        click.echo(f"Error loading document: {e}", err=True)
        sys.exit(1)
    if not isinstance(content, dict):
        click.echo("Error loading document: top-level value must be an object", err=True)
        sys.exit(1)
    return JsonDocument(Path(file_path), content)


def load_structured(file_path: str) -> StructuredData:
    """Load a JSON file as structured provenance data."""
    return StructuredData(load_document(file_path).content)


def export_jwk(key_pair: KeyPair, private: bool = True) -> Dict[str, Any]:
    """Return a validated JWK dictionary for ``key_pair``."""
    try:
        jwk = JsonWebKey.model_validate(key_pair.to_jwk(private=private))
    except ValidationError as e:
        click.echo(f"Error exporting key: {e}", err=True)
        sys.exit(1)
    return jwk.model_dump(exclude_none=True)


def format_value(value: Any) -> str:
    """Format a leaf value for text output."""
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)
