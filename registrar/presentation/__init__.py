"""
Presentation helpers for the command-line interface.
"""

from .display import DisplayVisitor, Palette

__all__ = ["DisplayVisitor", "Palette"]
