"""
niceowner Configuration - TOML-backed defaults for Owner behaviour.

The `[niceowner]` table of the config file may set:
- overwrite_policy: what Owner.replace() does when the slot is occupied
- warn_unreturned: emit a ResourceWarning when an empty Owner is collected

Example usage:
    import niceowner.config

    niceowner.config.use_file("settings/niceowner.toml")
    cfg = niceowner.config.get()
    print(cfg.overwrite_policy)        # Read
    cfg.overwrite_policy = "strict"    # Write (auto-flushes)
"""

from pathlib import Path

from niceowner.config.runtime import ConfigLoadError, ConfigProxy
from niceowner.config.schema import ConfigField, generate_default_config
from niceowner.config.toml_handler import generate_toml_from_schema

SECTION = "niceowner"

SCHEMA: dict[str, ConfigField] = {
    "overwrite_policy": ConfigField(
        str,
        "silent",
        "What replace() does when the Owner still holds a value",
        choices=["silent", "warn", "strict"],
    ),
    "warn_unreturned": ConfigField(
        bool,
        False,
        "Emit a ResourceWarning when an Owner is dropped while its value is lent out",
    ),
}

# Default config file path
_config_file = Path("config/niceowner.toml")

_proxy: ConfigProxy | None = None


class ConfigError(Exception):
    """Base exception for config API errors."""

    pass


def get() -> ConfigProxy:
    """
    Get the runtime configuration accessor.

    The file is read once and cached until use_file() or reload().

    Returns:
        ConfigProxy instance for runtime access

    Raises:
        ConfigLoadError: If the config file exists but is invalid
    """
    global _proxy
    if _proxy is None:
        _proxy = ConfigProxy(SECTION, SCHEMA, _config_file)
    return _proxy


def use_file(path: str | Path) -> None:
    """
    Point the configuration at another TOML file.

    Raises:
        ConfigError: If `path` names a directory
    """
    global _config_file
    path = Path(path)
    if path.is_dir():
        raise ConfigError(f"Config path {path} is a directory, expected a TOML file")
    _config_file = path
    reload()


def reload() -> None:
    """Drop the cached configuration; the next get() re-reads the file."""
    global _proxy
    _proxy = None


def default_toml() -> str:
    """Render the default configuration as commented TOML."""
    return generate_toml_from_schema(SECTION, SCHEMA, generate_default_config(SCHEMA))


__all__ = [
    "SCHEMA",
    "SECTION",
    "ConfigError",
    "ConfigLoadError",
    "default_toml",
    "get",
    "reload",
    "use_file",
]
