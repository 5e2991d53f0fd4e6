"""
Command-line interface for CargoKit.
"""

from .parser import CLI, main

__all__ = ["CLI", "main"]
