"""Core services for MiniSol."""

from .config import ConfigurationError, MiniSolConfig

__all__ = ["ConfigurationError", "MiniSolConfig"]
