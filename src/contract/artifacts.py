"""Artifact contract definitions.

Filenames and schema version of everything ``modpack generate`` writes.
"""

from __future__ import annotations

from dataclasses import dataclass

# Schema version for modules.jsonl and graph_summary.json.
ARTIFACT_SCHEMA_VERSION = 1

MODULES_JSONL = "modules.jsonl"
GRAPH_SUMMARY_JSON = "graph_summary.json"

# Banner written at the top of every bundle.
BUNDLE_BANNER = (
    "# DO NOT EDIT! This script was generated by modpack.\n"
    "# Manual edits may just break it.\n"
)


@dataclass(frozen=True)
class ArtifactSpec:
    """Filename and format of a generated artifact."""

    filename: str
    format: str
    required_fields_note: str


GRAPH_ARTIFACT_SPECS: dict[str, ArtifactSpec] = {
    "modules": ArtifactSpec(
        filename=MODULES_JSONL,
        format="jsonl",
        required_fields_note="GraphModuleRecord fields, one line per identity.",
    ),
    "graph_summary": ArtifactSpec(
        filename=GRAPH_SUMMARY_JSON,
        format="json",
        required_fields_note="GraphSummary fields required by contract.",
    ),
}
