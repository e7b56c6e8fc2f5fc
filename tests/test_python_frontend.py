from __future__ import annotations

import types
from pathlib import Path

import pytest

from contract.errors import FrontendError
from parse.frontend import PythonFrontend


def _compile(tmp_path: Path, source: str, name: str = "mod.py"):
    path = tmp_path / name
    path.write_text(source, encoding="utf-8")
    return PythonFrontend().parse_and_compile(path)


def _run(code: str, **dependencies: object) -> types.SimpleNamespace:
    """Execute generated code the way the bundle loader does."""
    exports = types.SimpleNamespace()
    module = types.SimpleNamespace(exports=exports)

    def require(reference: str) -> object:
        return dependencies[reference]

    exec(
        compile(code, "mod.py", "exec"),
        {"__name__": "mod", "require": require, "module": module, "exports": exports},
    )
    return module.exports


def test_references_follow_source_order_with_duplicates(tmp_path: Path) -> None:
    compiled = _compile(
        tmp_path,
        "from .b import x\n"
        "import os\n"
        "\n"
        "def lazy():\n"
        "    from ..c import y\n"
        "    return y\n"
        "\n"
        "from .b import z\n"
        "from . import d, e as f\n",
    )

    assert compiled.dependency_references == (".b", "..c", ".b", ".d", ".e")


def test_absolute_imports_are_left_alone(tmp_path: Path) -> None:
    compiled = _compile(tmp_path, "import os\nfrom json import dumps\n")

    assert compiled.dependency_references == ()
    assert "import os" in compiled.generated_code
    assert "from json import dumps" in compiled.generated_code


def test_from_import_binds_names_through_require(tmp_path: Path) -> None:
    compiled = _compile(
        tmp_path, "from .b import value, other as renamed\ntotal = value + renamed\n"
    )

    assert "require('.b')" in compiled.generated_code
    exports = _run(
        compiled.generated_code,
        **{".b": types.SimpleNamespace(value=1, other=2)},
    )
    assert exports.total == 3
    assert exports.value == 1
    assert exports.renamed == 2
    assert not hasattr(exports, "__modpack_dependency")


def test_submodule_import_binds_exports(tmp_path: Path) -> None:
    compiled = _compile(tmp_path, "from . import helpers as h\nresult = h.VALUE\n")

    exports = _run(
        compiled.generated_code,
        **{".helpers": types.SimpleNamespace(VALUE="ok")},
    )

    assert compiled.dependency_references == (".helpers",)
    assert exports.result == "ok"


def test_star_import_copies_public_names(tmp_path: Path) -> None:
    compiled = _compile(tmp_path, "from .consts import *\ndoubled = SIZE * 2\n")

    exports = _run(
        compiled.generated_code,
        **{".consts": types.SimpleNamespace(SIZE=4, _hidden=1)},
    )

    assert compiled.dependency_references == (".consts",)
    assert exports.doubled == 8
    assert not hasattr(exports, "_hidden")


def test_exports_trailer_publishes_public_globals(tmp_path: Path) -> None:
    compiled = _compile(
        tmp_path,
        "_private = 1\n"
        "PUBLIC = 2\n"
        "\n"
        "def helper():\n"
        "    return PUBLIC\n",
    )

    exports = _run(compiled.generated_code)

    assert exports.PUBLIC == 2
    assert exports.helper() == 2
    assert not hasattr(exports, "_private")
    assert not hasattr(exports, "require")
    assert not hasattr(exports, "module")
    assert not hasattr(exports, "exports")


def test_exports_trailer_honours_dunder_all(tmp_path: Path) -> None:
    compiled = _compile(tmp_path, "__all__ = ['kept']\nkept = 1\ndropped = 2\n")

    exports = _run(compiled.generated_code)

    assert vars(exports) == {"kept": 1}


def test_compiling_never_executes_module_code(tmp_path: Path) -> None:
    compiled = _compile(tmp_path, "raise SystemExit('executed at build time')\n")

    assert "SystemExit" in compiled.generated_code


def test_syntax_error_raises_frontend_error(tmp_path: Path) -> None:
    with pytest.raises(FrontendError, match="syntax error at line 2") as exc_info:
        _compile(tmp_path, "x = 1\ndef broken(:\n")

    assert exc_info.value.location == str(tmp_path / "mod.py")


def test_invalid_encoding_raises_frontend_error(tmp_path: Path) -> None:
    path = tmp_path / "latin.py"
    path.write_bytes(b"name = '\xe9t\xe9'\n")

    with pytest.raises(FrontendError, match="not valid utf-8"):
        PythonFrontend().parse_and_compile(path)


def test_missing_file_raises_frontend_error(tmp_path: Path) -> None:
    with pytest.raises(FrontendError, match="cannot read source"):
        PythonFrontend().parse_and_compile(tmp_path / "absent.py")


def test_from_package_import_submodule_requires_the_submodule(tmp_path: Path) -> None:
    (tmp_path / "pkg").mkdir()
    (tmp_path / "pkg" / "__init__.py").write_text("", encoding="utf-8")
    (tmp_path / "pkg" / "helpers.py").write_text("X = 7\n", encoding="utf-8")

    compiled = _compile(
        tmp_path, "from .pkg import helpers, VERSION\nvalue = helpers.X\n"
    )

    assert compiled.dependency_references == (".pkg", ".pkg.helpers")
    assert "helpers = require('.pkg.helpers')" in compiled.generated_code
    exports = _run(
        compiled.generated_code,
        **{
            ".pkg": types.SimpleNamespace(VERSION="1.0"),
            ".pkg.helpers": types.SimpleNamespace(X=7),
        },
    )
    assert exports.value == 7
    assert exports.VERSION == "1.0"


def test_globals_are_published_before_each_require(tmp_path: Path) -> None:
    compiled = _compile(tmp_path, "EARLY = 1\nfrom .other import value\nLATE = 2\n")
    seen: dict[str, object] = {}
    exports = types.SimpleNamespace()

    def require(reference: str) -> object:
        seen.update(vars(exports))
        return types.SimpleNamespace(value=0)

    exec(
        compile(compiled.generated_code, "mod.py", "exec"),
        {
            "__name__": "mod",
            "require": require,
            "module": types.SimpleNamespace(exports=exports),
            "exports": exports,
        },
    )

    assert seen == {"EARLY": 1}
    assert vars(exports) == {"EARLY": 1, "value": 0, "LATE": 2}


def test_suffixes_decide_submodule_detection(tmp_path: Path) -> None:
    (tmp_path / "pkg").mkdir()
    (tmp_path / "pkg" / "__init__.py").write_text("", encoding="utf-8")
    (tmp_path / "pkg" / "tool.pyw").write_text("", encoding="utf-8")
    path = tmp_path / "mod.py"
    path.write_text("from .pkg import tool\n", encoding="utf-8")

    default = PythonFrontend().parse_and_compile(path)
    extended = PythonFrontend(suffixes=(".py", ".pyw")).parse_and_compile(path)

    assert default.dependency_references == (".pkg",)
    assert extended.dependency_references == (".pkg", ".pkg.tool")
