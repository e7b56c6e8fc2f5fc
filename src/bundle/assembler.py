"""Bundle assembly: module table plus runtime loader, as one Python script."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import orjson

from bundle.runtime import loader_source
from contract.artifacts import BUNDLE_BANNER
from utils import path_to_module, relative_posix

if TYPE_CHECKING:
    from contract.models import ModuleGraph, ModuleRecord

logger = logging.getLogger(__name__)

ENTRY_MODULE_NAME = "__main__"


def module_name(record: ModuleRecord, root: Path) -> str:
    """Return the ``__name__`` a module runs under inside the bundle."""
    if record.identity == 0:
        return ENTRY_MODULE_NAME
    try:
        return path_to_module(relative_posix(record.location, root))
    except ValueError:
        return f"module_{record.identity}"


def _module_entry(record: ModuleRecord, root: Path) -> str:
    filename = relative_posix(record.location, root)
    namespace = (
        "{"
        f'"__name__": {module_name(record, root)!r}, "__file__": {filename!r}, '
        '"require": require, "module": module, "exports": exports'
        "}"
    )
    mapping = orjson.dumps(record.reference_map).decode("utf-8")
    return (
        f"    {record.identity}: (\n"
        "        lambda require, module, exports: exec(\n"
        f"            compile({record.generated_code!r}, {filename!r}, 'exec'),\n"
        f"            {namespace},\n"
        "        ),\n"
        f"        {mapping},\n"
        "    ),\n"
    )


def assemble_bundle(
    graph: ModuleGraph,
    *,
    root: Path | None = None,
    cache_exports: bool = False,
) -> str:
    """Emit a self-contained Python script that runs the graph's entry module.

    Args:
        graph: Module graph produced by the graph builder.
        root: Directory embedded paths are made relative to
            (default: the entry module's directory).
        cache_exports: Emit a loader that memoizes exports per identity.

    Returns:
        Bundle source. Identical graphs yield identical text.
    """
    if root is None:
        root = Path(graph.entry.location).parent

    parts = [
        "#!/usr/bin/env python3\n",
        BUNDLE_BANNER,
        f"# Entry: {relative_posix(graph.entry.location, root)}\n",
        f"# Modules: {len(graph)}\n",
        "\n",
        loader_source(cache_exports=cache_exports),
        "\n\n",
        "_bundle({\n",
    ]
    parts.extend(_module_entry(record, root) for record in graph)
    parts.append("})\n")

    logger.debug(
        "assembled bundle of %d modules (cache_exports=%s)", len(graph), cache_exports
    )
    return "".join(parts)


__all__ = ["ENTRY_MODULE_NAME", "assemble_bundle", "module_name"]
