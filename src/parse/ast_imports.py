"""AST-based relative import rewriting."""

from __future__ import annotations

import ast
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

# Temporary binding used while unpacking ``from .mod import a, b``.
_DEPENDENCY_NAME = "__modpack_dependency"

# Publishes the module's public globals (or ``__all__``) into ``exports``.
# Emitted before every ``require`` and once more at the end of the module, so a
# module caught in an import cycle exposes what it has defined so far.
EXPORTS_SYNC = """\
exports.__dict__.update(
    (_name, _value)
    for _name, _value in list(globals().items())
    if not _name.startswith('_')
    and _name not in ('require', 'module', 'exports')
    and _name in globals().get('__all__', (_name,))
)
"""


def _statement(source: str) -> ast.stmt:
    return ast.parse(source).body[0]


def _relative_reference(node: ast.ImportFrom, name: str | None = None) -> str:
    """Build the reference string for a relative import.

    Examples:
        ``from ..pkg import x`` -> ``"..pkg"``
        ``from . import sub`` -> ``".sub"`` (``name="sub"``)
        ``from .pkg import sub`` -> ``".pkg.sub"`` (``name="sub"``)
    """
    parts = [part for part in (node.module, name) if part]
    return "." * node.level + ".".join(parts)


class RelativeImportRewriter(ast.NodeTransformer):
    """Replace relative imports with calls to the bundle's scoped ``require``.

    References are collected in source order, duplicates included.
    Absolute imports are left for the host interpreter.

    ``is_module`` decides whether ``from .pkg import name`` names the
    submodule ``.pkg.name``; without it every such name is read from the
    package's exports.
    """

    def __init__(self, is_module: Callable[[str], bool] | None = None) -> None:
        self.references: list[str] = []
        self.is_module = is_module

    def visit_ImportFrom(self, node: ast.ImportFrom) -> ast.AST | list[ast.stmt]:
        if node.level == 0:
            return node

        statements = ast.parse(EXPORTS_SYNC).body

        if node.module is None and not _is_star(node):
            statements.extend(
                self._require_as(alias.asname or alias.name, alias.name, node)
                for alias in node.names
            )
            return _located(statements, node)

        reference = self._require(_relative_reference(node))

        if _is_star(node):
            statements.append(
                _statement(
                    "globals().update({_name: _value for _name, _value in "
                    f"vars(require({reference!r})).items() "
                    "if not _name.startswith('_')})"
                )
            )
            return _located(statements, node)

        # The package runs before any of its submodules, as in a normal import.
        statements.append(_statement(f"{_DEPENDENCY_NAME} = require({reference!r})"))
        for alias in node.names:
            binding = alias.asname or alias.name
            submodule = _relative_reference(node, alias.name)
            if self.is_module is not None and self.is_module(submodule):
                statements.append(self._require_as(binding, alias.name, node))
            else:
                statements.append(
                    _statement(f"{binding} = {_DEPENDENCY_NAME}.{alias.name}")
                )
        statements.append(_statement(f"del {_DEPENDENCY_NAME}"))
        return _located(statements, node)

    def _require(self, reference: str) -> str:
        self.references.append(reference)
        return reference

    def _require_as(self, binding: str, name: str, node: ast.ImportFrom) -> ast.stmt:
        reference = self._require(_relative_reference(node, name))
        return _statement(f"{binding} = require({reference!r})")


def _is_star(node: ast.ImportFrom) -> bool:
    return any(alias.name == "*" for alias in node.names)


def _located(statements: list[ast.stmt], node: ast.AST) -> list[ast.stmt]:
    for statement in statements:
        for child in ast.walk(statement):
            ast.copy_location(child, node)
    return statements


def rewrite_relative_imports(
    tree: ast.Module,
    *,
    is_module: Callable[[str], bool] | None = None,
) -> tuple[ast.Module, list[str]]:
    """Rewrite relative imports in ``tree`` and return the references found.

    Args:
        tree: Parsed module; it is modified in place.
        is_module: Reports whether a reference names an existing module.

    Returns:
        The rewritten tree and its dependency references in source order.
    """
    rewriter = RelativeImportRewriter(is_module)
    rewritten = rewriter.visit(tree)
    ast.fix_missing_locations(rewritten)
    return rewritten, rewriter.references


__all__ = [
    "EXPORTS_SYNC",
    "RelativeImportRewriter",
    "rewrite_relative_imports",
]
