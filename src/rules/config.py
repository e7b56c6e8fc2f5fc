from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from contract.models import IdentityPolicy

CONFIG_FILENAME = "modpack.toml"


class BundleConfig(BaseModel):
    """Configuration for modpack graph building and bundle generation."""

    model_config = ConfigDict(extra="forbid")

    entry: str | None = Field(
        default=None,
        description="Entry module path relative to the project root",
    )
    output_dir: str = Field(
        default=".modpack",
        description="Output directory for generated artifacts",
    )
    bundle_name: str = Field(
        default="bundle.py",
        description="Filename of the bundle inside output_dir",
    )
    identity_policy: IdentityPolicy = Field(
        default="per_location",
        description=(
            "per_location: one module record per file; "
            "per_reference: one record per reference occurrence"
        ),
    )
    cache_exports: bool = Field(
        default=False,
        description="Memoize module exports in the generated loader",
    )
    max_modules: int = Field(
        default=10_000,
        ge=1,
        description="Upper bound on module records created by one build",
    )
    suffixes: list[str] = Field(
        default_factory=lambda: [".py"],
        description="Suffixes probed when resolving extension-less references",
    )

    @field_validator("bundle_name")
    @classmethod
    def validate_bundle_name(cls, v: str) -> str:
        if not v or "/" in v or "\\" in v or v in {".", ".."}:
            msg = f"bundle_name must be a plain filename, got {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("suffixes")
    @classmethod
    def validate_suffixes(cls, v: list[str]) -> list[str]:
        for suffix in v:
            if not suffix.startswith(".") or len(suffix) < 2:
                msg = f"suffixes must look like '.py', got {suffix!r}"
                raise ValueError(msg)
        return v


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the project root.

    The config output_dir must be a non-empty relative path that remains
    within the project root after resolution. Absolute paths and paths
    that escape the root are rejected.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    if output_dir.startswith("~"):
        msg = "output_dir must be a relative path within the project root"
        raise ConfigError(msg)

    output_path = Path(output_dir)
    if output_path.is_absolute():
        msg = "output_dir must be a relative path within the project root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_output.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"output_dir '{output_dir}' escapes the project root"
        raise ConfigError(msg) from exc

    return resolved_output


def resolve_entry(root: Path, entry: str | None, config: BundleConfig) -> Path:
    """Pick the entry module: explicit argument first, then config."""
    chosen = entry if entry is not None else config.entry
    if chosen is None:
        msg = f"no entry module given and none configured in {CONFIG_FILENAME}"
        raise ConfigError(msg)
    entry_path = Path(chosen).expanduser()
    if not entry_path.is_absolute():
        entry_path = root / entry_path
    return entry_path


def load_config(root: Path) -> BundleConfig:
    """Load configuration from modpack.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return BundleConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return BundleConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
