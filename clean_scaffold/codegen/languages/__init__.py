"""
Language-specific code generators.

This module contains generators for different target languages.
"""

from .dart import DartGenerator

__all__ = ["DartGenerator"]
