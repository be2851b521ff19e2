"""
Notification dispatch for dclone-tracker.
"""

from .notifier import ChangeNotifier

__all__ = ["ChangeNotifier"]
