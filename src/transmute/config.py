"""Runtime configuration for transmute."""

import logging
import os
from dataclasses import dataclass

from transmute.modifier.types import ModifyMode

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class TransformConfig:
    """Settings shared by the CLI and library callers.

    Attributes:
        mode: Mode for specs that do not name an operation
        log_level: Logging level name
    """

    mode: ModifyMode = ModifyMode.OVERWRITE
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "TransformConfig":
        """Create config from environment variables.

        TRANSMUTE_MODE: overwrite | default | define (default: overwrite)
        TRANSMUTE_LOG_LEVEL: logging level name (default: WARNING)
        """
        mode = os.environ.get("TRANSMUTE_MODE")
        log_level = os.environ.get("TRANSMUTE_LOG_LEVEL", "WARNING")
        return cls(
            mode=ModifyMode.parse(mode) if mode else ModifyMode.OVERWRITE,
            log_level=log_level.upper(),
        )


def configure_logging(level: str) -> None:
    """Configure the root logger for command-line use."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
