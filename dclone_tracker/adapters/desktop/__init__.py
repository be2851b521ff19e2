"""
Desktop notification adapter.
"""

from .notifier import DesktopNotifier

__all__ = ["DesktopNotifier"]
