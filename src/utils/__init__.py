"""Utility functions for the blast engine tooling."""
from .logger import Logger, MetricsTracker

__all__ = [
    "Logger",
    "MetricsTracker",
]
