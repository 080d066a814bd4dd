"""Token usage data model and pure rendering helpers for a terminal usage dashboard."""

__version__ = "0.2.3"
__all__ = ["columns", "heatmap", "spike_chart", "theme", "types", "views"]