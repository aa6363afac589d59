"""Tick-based CPU scheduling simulator, its policies and its client applications."""

__version__ = "0.1.0"