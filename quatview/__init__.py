"""Rotations, transforms and their text forms across configurable coordinate systems."""

__version__ = "0.1.0"