"""Personalized fitness targets and catalog-based plan recommendations."""

__version__ = "0.1.0"
