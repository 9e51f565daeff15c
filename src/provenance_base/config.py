# SPDX-License-Identifier: MPL-2.0
"""Environment-based configuration."""
import logging
import os

from provenance_base.core.exceptions import ConfigurationError

LOG_LEVEL = os.getenv("PROVENANCE_LOG_LEVEL", "WARNING")
FLATTEN_SEPARATOR = os.getenv("PROVENANCE_FLATTEN_SEPARATOR", ".")


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configure root logging for command-line use."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ConfigurationError(
            f"Invalid log level: {level}", {"PROVENANCE_LOG_LEVEL": level}
        )
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
