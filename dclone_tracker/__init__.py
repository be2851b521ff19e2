"""
dclone-tracker.

Polls the diablo2.io DClone status API and raises a desktop notification
whenever the progress of a region changes.
"""

__version__ = "0.1.0"
