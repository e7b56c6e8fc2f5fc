"""Loader source embedded at the top of every bundle.

``_bundle`` receives the module table ``{identity: (body, mapping)}`` and runs
identity 0. Each body is called with a scoped ``require``, a fresh module state
and its ``exports`` namespace.
"""

from __future__ import annotations

LOADER = '''\
import types as _types


def _bundle(modules):
    def load(identity):
        body, mapping = modules[identity]

        def require(reference):
            if reference not in mapping:
                raise ImportError(
                    f"module {identity} has no bundled dependency {reference!r}"
                )
            return load(mapping[reference])

        module = _types.SimpleNamespace(exports=_types.SimpleNamespace())
        body(require, module, module.exports)
        return module.exports

    return load(0)
'''

# Memoizes module state by identity before the body runs, so a cycle hands the
# second caller a partially populated exports namespace.
CACHING_LOADER = '''\
import types as _types


def _bundle(modules):
    cache = {}

    def load(identity):
        if identity in cache:
            return cache[identity].exports
        body, mapping = modules[identity]

        def require(reference):
            if reference not in mapping:
                raise ImportError(
                    f"module {identity} has no bundled dependency {reference!r}"
                )
            return load(mapping[reference])

        module = _types.SimpleNamespace(exports=_types.SimpleNamespace())
        cache[identity] = module
        body(require, module, module.exports)
        return module.exports

    return load(0)
'''


def loader_source(*, cache_exports: bool = False) -> str:
    return CACHING_LOADER if cache_exports else LOADER


__all__ = ["CACHING_LOADER", "LOADER", "loader_source"]
