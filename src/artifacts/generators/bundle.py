"""Bundle script generator."""

from __future__ import annotations

from pathlib import Path  # noqa: TC003
from typing import Any

from bundle.assembler import assemble_bundle
from contract.models import ModuleGraph


class BundleGenerator:
    """Writes the assembled bundle script into the artifacts directory."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "bundle"

    def generate(
        self,
        root: Path,
        out_dir: Path,
        **kwargs: Any,
    ) -> tuple[list[dict[str, Any]], str]:
        graph: ModuleGraph = kwargs["graph"]
        bundle_name: str = kwargs.get("bundle_name", "bundle.py")
        cache_exports: bool = kwargs.get("cache_exports", False)

        out_dir.mkdir(parents=True, exist_ok=True)

        code = assemble_bundle(graph, root=root, cache_exports=cache_exports)
        (out_dir / bundle_name).write_bytes(code.encode("utf-8"))

        return [], bundle_name


__all__ = ["BundleGenerator"]
