"""
Helpers for Python-driven Cargo build steps.

``BuildScriptEnv`` reads what Cargo passes to a build script and ``out``
prints the directives Cargo reads back.
"""

from . import out
from .env import BuildScriptEnv

__all__ = ["BuildScriptEnv", "out"]
