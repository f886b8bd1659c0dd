"""A thread pool with fixed and cached modes, future-based results and a demo command."""

__version__ = "0.1.0"
__all__ = ["common", "worker", "pool", "cli"]