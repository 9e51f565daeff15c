# SPDX-License-Identifier: MPL-2.0
"""Main CLI entry point."""
import json
import sys

import click

from provenance_base import config
from provenance_base.cli.commands import export_jwk, format_value, load_document, load_structured
from provenance_base.core.crypto import DigestSignature, KeyPair
from provenance_base.core.exceptions import ProvenanceError
from provenance_base.core.flatten import flatten, join_paths
from provenance_base.core.record import construct


@click.group()  # type: ignore[misc]
@click.option("--log-level", default=config.LOG_LEVEL, show_default=True, help="Logging level")
def cli(log_level: str) -> None:
    """Provenance Base CLI."""
    config.configure_logging(log_level)


@cli.command()  # type: ignore[misc]
def version() -> None:
    """Show version information."""
    from provenance_base import __version__

    click.echo(f"Provenance Base v{__version__}")


@cli.command()  # type: ignore[misc]
@click.option("--kid", help="Key identifier (default: random)")
@click.option("--public", "public_only", is_flag=True, help="Omit the private key")
def keygen(kid: str, public_only: bool) -> None:
    """Generate an Ed25519 key pair and print it as a JWK."""
    key_pair = KeyPair.generate(kid)
    click.echo(json.dumps(export_jwk(key_pair, private=not public_only), indent=2))


@cli.command(name="flatten")  # type: ignore[misc]
@click.argument("document", type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "-f", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format")
@click.option("--separator", "-s", default=config.FLATTEN_SEPARATOR, show_default=True,
              help="Separator used to join key-paths")
def flatten_command(document: str, output_format: str, separator: str) -> None:
    """Flatten a JSON document into key-path/value pairs."""
    flat = join_paths(flatten(load_structured(document)), separator)

    if output_format == "json":
        click.echo(json.dumps(flat, indent=2, default=str))
    else:
        for path, value in flat.items():
            click.echo(f"{path} = {format_value(value)}")


@cli.command()  # type: ignore[misc]
@click.argument("document", type=click.Path(exists=True, dir_okay=False))
def digest(document: str) -> None:
    """Capture a JSON document's provenance with a SHA-256 digest."""
    doc = load_document(document)
    try:
        record = construct(doc, DigestSignature())
    except ProvenanceError as e:
        click.echo(f"Error computing digest: {e}", err=True)
        sys.exit(1)
    click.echo(json.dumps(
        {
            "algorithm": record.signature.algorithm,
            "value": record.signature.value,
            "timestamp": record.timestamp.isoformat(),
            "fields": len(flatten(record)),
        },
        indent=2,
    ))


if __name__ == "__main__":
    cli()
