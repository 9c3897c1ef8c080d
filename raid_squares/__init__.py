"""Raid Squares — a grid of party/raid health squares."""

__version__ = "0.1.0"
