"""Command-line interfaces for alkon.

This module provides the ``alkon`` CLI and the ``alkon-inventory`` summarizer.
"""

from .main import main

__all__ = ["main"]
