"""Pointer-analysis helpers: DOT rendering, index trees, memory sampling, option parsing and result reports."""

__version__ = "0.1.0"