"""Hustings: multi-party election campaign simulator."""

__version__ = "0.1.0"
