"""Global application context for the CLI."""

from __future__ import annotations

from pathlib import Path

from .config import PhasedepsConfig


class _Context:
    """Holds the --config path and the configuration loaded from it."""

    def __init__(self) -> None:
        self.config_path: Path | None = None
        self.config: PhasedepsConfig | None = None


# Singleton instance
_context = _Context()


def get_config_path() -> Path | None:
    """Get the config path given on the command line, if any."""
    return _context.config_path


def set_config_path(path: Path | None) -> None:
    """Set the config path and drop any configuration loaded earlier."""
    _context.config_path = path
    _context.config = None


def get_loaded_config() -> PhasedepsConfig | None:
    """Get the configuration cached by the last load, if any."""
    return _context.config


def set_loaded_config(config: PhasedepsConfig | None) -> None:
    """Cache a loaded configuration for later commands in this process."""
    _context.config = config
