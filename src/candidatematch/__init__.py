"""Heuristic candidate ranking and evaluation filtering."""

__version__ = "0.1.0"
