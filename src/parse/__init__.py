"""Frontends and reference resolution."""

from parse.ast_imports import (
    EXPORTS_SYNC,
    RelativeImportRewriter,
    rewrite_relative_imports,
)
from parse.frontend import EXPORTS_TRAILER, Frontend, PythonFrontend
from parse.references import (
    DEFAULT_SUFFIXES,
    is_dotted_reference,
    reference_candidates,
    resolve_reference,
)

__all__ = [
    "DEFAULT_SUFFIXES",
    "EXPORTS_SYNC",
    "EXPORTS_TRAILER",
    "Frontend",
    "PythonFrontend",
    "RelativeImportRewriter",
    "is_dotted_reference",
    "reference_candidates",
    "resolve_reference",
    "rewrite_relative_imports",
]
