"""MySQL wire-protocol packets, storage key layout, scan planning and an in-memory store."""

__version__ = "0.1.0"