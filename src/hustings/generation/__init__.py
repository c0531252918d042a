"""Randomised election generation."""

from hustings.generation.generator import ElectionGenerator

__all__ = ["ElectionGenerator"]
