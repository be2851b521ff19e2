"""
diablo2.io status API adapter.
"""

from .client import Diablo2ioClient

__all__ = ["Diablo2ioClient"]
