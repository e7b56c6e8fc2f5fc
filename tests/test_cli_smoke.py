from __future__ import annotations

import shutil
import subprocess
import sys
from pathlib import Path

import pytest

from cli import main
from rules.config import ConfigError, load_config, resolve_output_dir


def _write_minimal_app(root: Path) -> None:
    (root / "pkg").mkdir(parents=True, exist_ok=True)
    (root / "pkg" / "__init__.py").write_text("", encoding="utf-8")
    (root / "pkg" / "module.py").write_text(
        '"""Minimal module."""\n\nNAME = "minimal"\n',
        encoding="utf-8",
    )
    (root / "main.py").write_text(
        "from .pkg.module import NAME\n\nprint(NAME)\n",
        encoding="utf-8",
    )


def _copy_mini_app_fixture(root: Path) -> None:
    fixture_repo = Path(__file__).parent / "fixtures" / "mini_app"
    shutil.copytree(fixture_repo, root)


def test_cli_bundle_writes_to_stdout(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = tmp_path / "repo"
    _write_minimal_app(repo_root)

    exit_code = main(["bundle", "main.py", "--root", str(repo_root)])

    assert exit_code == 0
    captured = capsys.readouterr()
    assert captured.out.startswith("#!/usr/bin/env python3\n")
    assert "# Modules: 2\n" in captured.out


def test_cli_bundle_output_runs_without_sources(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _copy_mini_app_fixture(repo_root)
    bundle_path = tmp_path / "dist" / "app.py"

    exit_code = main(
        ["bundle", "main.py", "--root", str(repo_root), "-o", str(bundle_path)]
    )
    shutil.rmtree(repo_root)

    assert exit_code == 0
    completed = subprocess.run(
        [sys.executable, str(bundle_path)],
        capture_output=True,
        text=True,
        cwd=tmp_path,
        check=True,
    )
    assert completed.stdout == "HELLO, FIXTURE!\n1 2\n6\n"


def test_cli_generate_default_output_dir_from_fixture(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _copy_mini_app_fixture(repo_root)

    assert not (repo_root / ".modpack").exists(), "output dir must not pre-exist"
    exit_code = main(["generate", "main.py", "--root", str(repo_root)])

    default_out_dir = repo_root / ".modpack"
    assert exit_code == 0
    assert (default_out_dir / "bundle.py").is_file()
    assert (default_out_dir / "modules.jsonl").is_file()


def test_cli_generate_uses_configured_entry(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _copy_mini_app_fixture(repo_root)
    (repo_root / "modpack.toml").write_text(
        'entry = "main.py"\nbundle_name = "app.py"\n', encoding="utf-8"
    )

    out_dir = tmp_path / "artifacts"
    exit_code = main(["generate", "--root", str(repo_root), "--out-dir", str(out_dir)])

    assert exit_code == 0
    assert (out_dir / "app.py").is_file()


def test_cli_generate_then_verify(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _copy_mini_app_fixture(repo_root)

    assert main(["generate", "main.py", "--root", str(repo_root)]) == 0
    assert main(["verify", "main.py", "--root", str(repo_root)]) == 0


def test_cli_verify_reports_policy_mismatch(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = tmp_path / "repo"
    _copy_mini_app_fixture(repo_root)
    out_dir = tmp_path / "artifacts"

    main(
        [
            "generate",
            "main.py",
            "--root",
            str(repo_root),
            "--out-dir",
            str(out_dir),
            "--cache-exports",
        ]
    )
    exit_code = main(
        ["verify", "main.py", "--root", str(repo_root), "--artifacts-dir", str(out_dir)]
    )

    assert exit_code == 1
    assert "mismatches: bundle.py" in capsys.readouterr().err


def test_cli_verify_missing_artifacts_dir_reports_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = tmp_path / "repo"
    _write_minimal_app(repo_root)
    default_artifacts_dir = (repo_root / load_config(repo_root).output_dir).resolve()

    exit_code = main(["verify", "main.py", "--root", str(repo_root)])

    assert exit_code == 2
    captured = capsys.readouterr()
    assert f"artifacts-dir: {default_artifacts_dir}" in captured.err
    assert "Artifacts directory does not exist" in captured.err


def test_cli_reports_resolution_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    (repo_root / "main.py").write_text("from .gone import x\n", encoding="utf-8")

    exit_code = main(["bundle", "main.py", "--root", str(repo_root)])

    assert exit_code == 1
    err = capsys.readouterr().err
    assert "error: cannot resolve '.gone' from" in err
    assert str(repo_root / "main.py") in err


def test_cli_reports_frontend_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    (repo_root / "main.py").write_text("from .broken import x\n", encoding="utf-8")
    (repo_root / "broken.py").write_text("def (:\n", encoding="utf-8")

    exit_code = main(["bundle", "main.py", "--root", str(repo_root)])

    assert exit_code == 1
    err = capsys.readouterr().err
    assert "broken.py: syntax error at line 1" in err
    assert "(reference '.broken' in" in err


def test_cli_without_entry_reports_config_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(["bundle", "--root", str(tmp_path)])

    assert exit_code == 2
    assert "no entry module given" in capsys.readouterr().err


def test_resolve_output_dir_rejects_escape(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    with pytest.raises(ConfigError, match="escapes the project root"):
        resolve_output_dir(repo_root, "../outside")
