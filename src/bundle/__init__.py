"""Bundle assembly."""

from bundle.assembler import ENTRY_MODULE_NAME, assemble_bundle, module_name
from bundle.runtime import CACHING_LOADER, LOADER, loader_source

__all__ = [
    "CACHING_LOADER",
    "ENTRY_MODULE_NAME",
    "LOADER",
    "assemble_bundle",
    "loader_source",
    "module_name",
]
