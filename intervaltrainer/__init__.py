"""Interval Trainer: work/rest workout timer."""

__version__ = "0.1.0"
