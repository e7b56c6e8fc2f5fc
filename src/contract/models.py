"""Core data model shared by the graph builder and the bundle assembler."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from collections.abc import Iterator

# per_location: one record per file. per_reference: one record per reference
# occurrence, even when the file already has a record.
IdentityPolicy = Literal["per_location", "per_reference"]


class CompiledModule(BaseModel):
    """Result of compiling one module through a frontend."""

    model_config = ConfigDict(frozen=True)

    dependency_references: tuple[str, ...] = ()
    generated_code: str


class ModuleRecord(BaseModel):
    """One module occurrence in a build.

    ``reference_map`` is assigned exactly once, after every reference in
    ``dependency_references`` has been resolved to a record.
    """

    identity: int = Field(ge=0)
    location: str
    dependency_references: list[str] = Field(default_factory=list)
    generated_code: str
    reference_map: dict[str, int] = Field(default_factory=dict)


@dataclass(frozen=True)
class ModuleGraph:
    """Module records of one build, ordered by identity."""

    modules: tuple[ModuleRecord, ...]

    def __post_init__(self) -> None:
        if not self.modules:
            msg = "a module graph needs at least the entry module"
            raise ValueError(msg)
        for index, record in enumerate(self.modules):
            if record.identity != index:
                msg = (
                    f"module identities must be contiguous from 0: "
                    f"position {index} holds identity {record.identity}"
                )
                raise ValueError(msg)

    @property
    def entry(self) -> ModuleRecord:
        return self.modules[0]

    def __iter__(self) -> Iterator[ModuleRecord]:
        return iter(self.modules)

    def __len__(self) -> int:
        return len(self.modules)

    def __getitem__(self, identity: int) -> ModuleRecord:
        return self.modules[identity]


__all__ = ["CompiledModule", "IdentityPolicy", "ModuleGraph", "ModuleRecord"]
