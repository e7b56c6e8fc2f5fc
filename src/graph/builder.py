"""Breadth-first module graph construction."""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path
from typing import TYPE_CHECKING

from contract.errors import FrontendError, GraphLimitError
from contract.models import ModuleGraph, ModuleRecord
from graph.identity import IdentityAllocator, LocationIndex
from parse.frontend import PythonFrontend
from parse.references import resolve_reference
from rules.config import BundleConfig
from utils import normalize_location

if TYPE_CHECKING:
    from parse.frontend import Frontend

logger = logging.getLogger(__name__)


class GraphBuilder:
    """Builds the module graph reachable from one entry module.

    Records are processed in FIFO order. That order alone decides identity
    assignment, so a rebuild of unchanged sources yields the same graph.

    Under the ``per_reference`` policy every reference occurrence gets a fresh
    record, even for a location that already has one. A dependency cycle then
    grows the graph until ``max_modules`` is exceeded.
    """

    def __init__(
        self,
        frontend: Frontend | None = None,
        config: BundleConfig | None = None,
    ) -> None:
        self.config = config if config is not None else BundleConfig()
        self.frontend = (
            frontend
            if frontend is not None
            else PythonFrontend(suffixes=self.config.suffixes)
        )
        self._allocator = IdentityAllocator()
        self._locations = LocationIndex()
        self._records: list[ModuleRecord] = []

    def _create_record(
        self,
        location: Path,
        *,
        reference: str | None = None,
        referrer: str | None = None,
    ) -> ModuleRecord:
        if self._allocator.allocated >= self.config.max_modules:
            raise GraphLimitError(
                self.config.max_modules, reference=reference, referrer=referrer
            )

        try:
            compiled = self.frontend.parse_and_compile(location)
        except FrontendError as exc:
            if reference is None or referrer is None:
                raise
            raise exc.with_reference(reference, referrer) from exc

        record = ModuleRecord(
            identity=self._allocator.next_identity(),
            location=str(location),
            dependency_references=list(compiled.dependency_references),
            generated_code=compiled.generated_code,
        )
        self._records.append(record)
        self._locations.add(record.location, record.identity)
        logger.debug("module %d: %s", record.identity, record.location)
        return record

    def _resolve_dependencies(self, record: ModuleRecord) -> list[ModuleRecord]:
        """Fill ``record.reference_map`` and return newly created records."""
        directory = Path(record.location).parent
        reference_map: dict[str, int] = {}
        created: list[ModuleRecord] = []

        for reference in record.dependency_references:
            location = resolve_reference(
                directory,
                reference,
                referrer=record.location,
                suffixes=self.config.suffixes,
            )

            known = self._locations.get(str(location))
            if known is not None and self.config.identity_policy == "per_location":
                reference_map[reference] = known
                logger.debug(
                    "module %d: %r -> %d (seen)", record.identity, reference, known
                )
                continue

            child = self._create_record(
                location, reference=reference, referrer=record.location
            )
            reference_map[reference] = child.identity
            created.append(child)
            logger.debug(
                "module %d: %r -> %d", record.identity, reference, child.identity
            )

        record.reference_map = reference_map
        return created

    def build(self, entry_location: str | Path) -> ModuleGraph:
        if self._records:
            msg = "a GraphBuilder builds exactly one graph"
            raise RuntimeError(msg)

        entry = self._create_record(normalize_location(entry_location))
        queue = deque([entry])
        while queue:
            queue.extend(self._resolve_dependencies(queue.popleft()))

        logger.debug(
            "built graph of %d modules from %s", len(self._records), entry.location
        )
        return ModuleGraph(modules=tuple(self._records))


def build_graph(
    entry_location: str | Path,
    *,
    frontend: Frontend | None = None,
    config: BundleConfig | None = None,
) -> ModuleGraph:
    """Build the module graph reachable from ``entry_location``.

    Args:
        entry_location: Path of the entry module; it always gets identity 0.
        frontend: Frontend used to compile each module (default: Python).
        config: Identity policy, probing suffixes and module limit.

    Returns:
        Every reachable module record, ordered by identity.

    Raises:
        FrontendError: If a reachable module cannot be read or parsed.
        ResolutionError: If a reference does not resolve to an existing file.
        GraphLimitError: If the graph would exceed ``config.max_modules``.
    """
    return GraphBuilder(frontend=frontend, config=config).build(entry_location)


__all__ = ["GraphBuilder", "build_graph"]
