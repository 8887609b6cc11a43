"""Configuration file loading."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .config import Configuration
from .constants import CONFIG_FILE, CONFIG_SECTION
from .models import CmdNestError
from .schema import INTERPRETER_CONFIG_SCHEMA
from .validation import ConfigValidator

if TYPE_CHECKING:
    import logging

__all__ = ["ConfigLoader"]


class ConfigLoader:
    """Loads the interpreter settings from a TOML file.

    An explicit file must exist, the default location is optional.
    """

    def __init__(self, log: logging.Logger) -> None:
        """Initialize the config loader.

        Args:
            log: Logger instance for status and error messages
        """
        self.log = log
        self.errors: list[str] = []

    def load(self, config_filename: str = "") -> Configuration:
        """Load and validate the `[cmdnest]` settings.

        Args:
            config_filename: Optional path to a config file.
                             If empty, uses the default CONFIG_FILE location.

        Returns:
            The settings, with schema defaults for missing keys

        Raises:
            CmdNestError: If an explicit file is missing, or any file has syntax errors
        """
        if config_filename:
            fname = Path(os.path.expandvars(config_filename)).expanduser()
            if not fname.exists():
                self.log.critical("Config file not found: %s", fname)
                raise CmdNestError
            raw = self._load_config_file(fname)
        elif CONFIG_FILE.exists():
            raw = self._load_config_file(CONFIG_FILE)
        else:
            self.log.debug("No config file at %s, using defaults", CONFIG_FILE)
            raw = {}

        section = raw.get(CONFIG_SECTION, {})
        if not isinstance(section, dict):
            self.log.critical("[%s] must be a table", CONFIG_SECTION)
            raise CmdNestError

        validator = ConfigValidator(section, CONFIG_SECTION, self.log)
        self.errors = validator.validate(INTERPRETER_CONFIG_SCHEMA)
        for error in self.errors:
            self.log.error(error)
        validator.warn_unknown_keys(INTERPRETER_CONFIG_SCHEMA)

        # invalid values fall back to their defaults
        settings = {k: v for k, v in section.items() if k not in validator.invalid}
        return Configuration(settings, logger=self.log, schema=INTERPRETER_CONFIG_SCHEMA)

    def _load_config_file(self, fname: Path) -> dict[str, Any]:
        """Load a single TOML file.

        Raises:
            CmdNestError: If the file has syntax errors
        """
        self.log.info("Loading %s", fname)
        with fname.open("rb") as f:
            try:
                return tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                self.log.critical("Problem reading %s: %s", fname, e)
                raise CmdNestError from e
