"""Geodesic distances and travelling-salesman tour heuristics."""

__version__ = "0.1.0"
__all__ = ["location", "tsp"]