"""Module graph listing generator."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from artifacts.models.artifacts.modules import GraphModuleRecord
from artifacts.utils import _write_jsonl
from bundle.assembler import module_name
from contract.artifacts import MODULES_JSONL
from contract.models import ModuleGraph
from utils import relative_posix


class ModulesGenerator:
    """Generates modules.jsonl from a module graph."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "modules"

    def generate(
        self,
        root: Path,
        out_dir: Path,
        **kwargs: Any,
    ) -> tuple[list[dict[str, Any]], str]:
        """Write one record per module identity, in identity order."""
        graph: ModuleGraph = kwargs["graph"]

        out_dir.mkdir(parents=True, exist_ok=True)

        records = [
            GraphModuleRecord(
                identity=record.identity,
                path=relative_posix(record.location, root),
                module=module_name(record, root),
                dependency_references=record.dependency_references,
                reference_map=record.reference_map,
            )
            for record in graph
        ]

        _write_jsonl(out_dir / MODULES_JSONL, records)

        return [record.model_dump() for record in records], MODULES_JSONL


__all__ = ["MODULES_JSONL", "ModulesGenerator"]
