"""Push-based stream processing primitives and the windowed report example."""

__all__ = [
    "config",
    "report",
    "streams",
]
