from __future__ import annotations

from pathlib import Path

import pytest

from rules.config import ConfigError, load_config, resolve_entry


def _write_config(repo_root: Path, toml_content: str) -> None:
    (repo_root / "modpack.toml").write_text(toml_content, encoding="utf-8")


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_identity_policy_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, 'identity_policy = "per_file"')

    with pytest.raises(ConfigError, match="identity_policy"):
        load_config(tmp_path)


def test_bundle_name_must_be_plain_filename(tmp_path: Path) -> None:
    _write_config(tmp_path, 'bundle_name = "../escape.py"')

    with pytest.raises(ConfigError, match="plain filename"):
        load_config(tmp_path)


@pytest.mark.parametrize("suffix", ["py", "."])
def test_malformed_suffix_rejected(tmp_path: Path, suffix: str) -> None:
    _write_config(tmp_path, f'suffixes = ["{suffix}"]')

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_max_modules_must_be_positive(tmp_path: Path) -> None:
    _write_config(tmp_path, "max_modules = 0")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "entry = ")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


def test_valid_config_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
entry = "app/main.py"
output_dir = "build"
bundle_name = "app.py"
identity_policy = "per_reference"
cache_exports = true
max_modules = 50
suffixes = [".py", ".pyw"]
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.entry == "app/main.py"
    assert config.output_dir == "build"
    assert config.bundle_name == "app.py"
    assert config.identity_policy == "per_reference"
    assert config.cache_exports is True
    assert config.max_modules == 50
    assert config.suffixes == [".py", ".pyw"]


def test_empty_config_accepted(tmp_path: Path) -> None:
    _write_config(tmp_path, "")

    config = load_config(tmp_path)

    assert config.entry is None
    assert config.output_dir == ".modpack"
    assert config.bundle_name == "bundle.py"
    assert config.identity_policy == "per_location"
    assert config.cache_exports is False
    assert config.suffixes == [".py"]


def test_missing_config_file_gives_defaults(tmp_path: Path) -> None:
    assert load_config(tmp_path).output_dir == ".modpack"


def test_entry_argument_overrides_config(tmp_path: Path) -> None:
    _write_config(tmp_path, 'entry = "configured.py"')
    config = load_config(tmp_path)

    assert resolve_entry(tmp_path, None, config) == tmp_path / "configured.py"
    assert resolve_entry(tmp_path, "other.py", config) == tmp_path / "other.py"


def test_entry_required_somewhere(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="no entry module given"):
        resolve_entry(tmp_path, None, load_config(tmp_path))
