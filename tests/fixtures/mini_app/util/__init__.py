"""Package re-exporting a helper from a submodule."""

from .numbers import total

__all__ = ["total"]
