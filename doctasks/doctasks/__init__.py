"""Doctasks - declarative build rules for figures, listings and LaTeX documents.

Definition files declare targets; doit decides what is stale and runs the
external tools that regenerate it.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main CLI entry point
from .cli import main

__all__ = ["main"]
