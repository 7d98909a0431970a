"""Multisample Packer GUI package."""

__version__ = "1.0.0"

from .app import MspackApp
from .strings import Strings

__all__ = ["MspackApp", "Strings", "__version__"]
