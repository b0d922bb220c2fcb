"""
Runtime Configuration Access.

This module provides runtime access to configuration with auto-flush on write.

Key features:
- ConfigProxy class with attribute-based access
- Defaults filled in for fields the file leaves out
- Auto-flush to TOML file on attribute write, under a lock
- Validation on load and on write
"""

import threading
from pathlib import Path
from typing import Any

from niceowner.config.schema import (
    ConfigField,
    SchemaError,
    ValidationError,
    generate_default_config,
    validate_config,
)
from niceowner.config.toml_handler import TOMLError, read_toml, write_toml


class ConfigLoadError(Exception):
    """Raised when the config file cannot be loaded or flushed."""

    pass


class ConfigProxy:
    """
    Proxy object for runtime configuration access.

    Provides attribute-based access to one TOML section. All writes are
    validated against the schema and immediately flushed to the file.

    Example:
        cfg = ConfigProxy('niceowner', schema, config_file)
        value = cfg.overwrite_policy    # Read
        cfg.overwrite_policy = 'warn'   # Write (auto-flushes to file)
    """

    def __init__(
        self,
        section: str,
        schema: dict[str, ConfigField],
        config_file: Path,
    ):
        """
        Initialize ConfigProxy.

        Args:
            section: Name of the TOML table holding this configuration
            schema: Schema dictionary (field_name -> ConfigField)
            config_file: Path to the TOML config file

        Raises:
            ConfigLoadError: If the file exists but is unreadable or invalid
        """
        # Use object.__setattr__ to avoid triggering our custom __setattr__
        object.__setattr__(self, "_section", section)
        object.__setattr__(self, "_schema", schema)
        object.__setattr__(self, "_config_file", config_file)
        object.__setattr__(self, "_lock", threading.Lock())
        object.__setattr__(self, "_cache", generate_default_config(schema))

        self._load_config()

    def _load_config(self) -> None:
        """Overlay values from the config file onto the defaults."""
        if not self._config_file.exists():
            return
        try:
            data = read_toml(self._config_file)
            section = data.get(self._section, {})
            if not isinstance(section, dict):
                raise ValidationError(f"[{self._section}] must be a table")
            validate_config(section, self._schema)
        except (TOMLError, SchemaError) as e:
            raise ConfigLoadError(f"Failed to load config: {e}") from e
        self._cache.update(section)

    def __getattr__(self, name: str) -> Any:
        """
        Get configuration value by attribute access.

        Raises:
            AttributeError: If field doesn't exist in schema
        """
        if name.startswith("_"):
            return object.__getattribute__(self, name)

        if name not in self._schema:
            raise AttributeError(
                f"Configuration field '{name}' not found in schema for {self._section}"
            )

        return self._cache[name]

    def __setattr__(self, name: str, value: Any) -> None:
        """
        Set configuration value by attribute access with auto-flush.

        Raises:
            AttributeError: If field doesn't exist in schema
            ValidationError: If value fails validation
        """
        if name.startswith("_"):
            object.__setattr__(self, name, value)
            return

        if name not in self._schema:
            raise AttributeError(
                f"Configuration field '{name}' not found in schema for {self._section}"
            )

        self._schema[name].validate(value)

        with self._lock:
            self._cache[name] = value
            self._flush()

    def _flush(self) -> None:
        """
        Flush current configuration to TOML file.

        Other sections in the file are left untouched.
        """
        try:
            data = read_toml(self._config_file) if self._config_file.exists() else {}
            data[self._section] = self._cache.copy()
            write_toml(self._config_file, data)
        except TOMLError as e:
            raise ConfigLoadError(f"Failed to flush config to file: {e}") from e

    def as_dict(self) -> dict[str, Any]:
        """Snapshot of the current values."""
        return self._cache.copy()

    def __repr__(self) -> str:
        return f"ConfigProxy({self._section}, {self._cache})"
