"""Pauta: research-driven article generation for a renovation blog."""

__version__ = "0.1.0"
__author__ = "Pauta Team"

# Lazy import to avoid circular dependencies
# get_settings will be available after config module is loaded
__all__ = ["__version__", "__author__"]
