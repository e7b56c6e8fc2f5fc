"""Configuration for modpack builds."""

from rules.config import (
    CONFIG_FILENAME,
    BundleConfig,
    ConfigError,
    load_config,
    resolve_entry,
    resolve_output_dir,
)

__all__ = [
    "CONFIG_FILENAME",
    "BundleConfig",
    "ConfigError",
    "load_config",
    "resolve_entry",
    "resolve_output_dir",
]
