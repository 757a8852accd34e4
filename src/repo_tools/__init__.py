"""Thin wrapper around the git executable for reading and driving working copies."""

__version__ = "0.1.0"
