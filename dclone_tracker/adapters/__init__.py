"""
Adapters for dclone-tracker.

This module contains the concrete implementations of port interfaces
that handle external I/O and infrastructure concerns.
"""

from .diablo2io.client import Diablo2ioClient
from .desktop.notifier import DesktopNotifier

__all__ = ["Diablo2ioClient", "DesktopNotifier"]
