"""LRU set-associative cache simulator driven by memory traces."""

__version__ = "0.1.0"
