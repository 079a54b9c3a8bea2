"""Command-line interface for netlib."""

from .cli import main

__all__ = ["main"]
