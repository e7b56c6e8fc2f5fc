"""Frontend contract and the Python source frontend."""

from __future__ import annotations

import ast
from typing import TYPE_CHECKING, Protocol

from contract.errors import FrontendError
from contract.models import CompiledModule
from parse.ast_imports import EXPORTS_SYNC, rewrite_relative_imports
from parse.references import DEFAULT_SUFFIXES, reference_candidates

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


class Frontend(Protocol):
    """Reads, parses and compiles a single module.

    Implementations raise ``FrontendError`` for input they cannot read or
    parse. The returned ``generated_code`` is opaque to the rest of modpack.
    """

    def parse_and_compile(self, location: Path) -> CompiledModule: ...


# Final publication of module globals into ``exports``.
EXPORTS_TRAILER = EXPORTS_SYNC


class PythonFrontend:
    """Compile Python sources so their relative imports go through ``require``."""

    encoding = "utf-8"

    def __init__(self, suffixes: Sequence[str] = DEFAULT_SUFFIXES) -> None:
        self.suffixes = tuple(suffixes)

    def is_module(self, directory: Path, reference: str) -> bool:
        """Return True if ``reference`` names an existing file from ``directory``."""
        return any(
            candidate.is_file()
            for candidate in reference_candidates(
                directory, reference, suffixes=self.suffixes
            )
        )

    def read_source(self, location: Path) -> str:
        try:
            return location.read_text(encoding=self.encoding)
        except UnicodeDecodeError as exc:
            msg = f"not valid {self.encoding}: {exc.reason}"
            raise FrontendError(location, msg) from exc
        except OSError as exc:
            msg = f"cannot read source: {exc.strerror or exc}"
            raise FrontendError(location, msg) from exc

    def parse_and_compile(self, location: Path) -> CompiledModule:
        source = self.read_source(location)
        try:
            tree = ast.parse(source, str(location))
        except SyntaxError as exc:
            msg = f"syntax error at line {exc.lineno}: {exc.msg}"
            raise FrontendError(location, msg) from exc
        except ValueError as exc:
            raise FrontendError(location, str(exc)) from exc

        tree, references = rewrite_relative_imports(
            tree,
            is_module=lambda reference: self.is_module(location.parent, reference),
        )
        body = ast.unparse(tree)
        generated_code = f"{body}\n{EXPORTS_TRAILER}" if body else EXPORTS_TRAILER

        return CompiledModule(
            dependency_references=tuple(references),
            generated_code=generated_code,
        )


__all__ = ["EXPORTS_TRAILER", "Frontend", "PythonFrontend"]
