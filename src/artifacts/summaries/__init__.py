"""Summary builders for modpack artifacts."""

from artifacts.summaries.builders import compute_fan_stats, graph_edges

__all__ = ["compute_fan_stats", "graph_edges"]
