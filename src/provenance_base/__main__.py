# SPDX-License-Identifier: MPL-2.0
"""
Provenance Base - Main entry point for the CLI.
"""

from provenance_base.cli.main import cli

if __name__ == "__main__":
    cli()
