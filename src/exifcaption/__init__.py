"""Exposure captions for photographs."""

__version__ = "0.1.0"
