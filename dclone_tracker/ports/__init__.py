"""
Port interfaces for dclone-tracker.

This module defines the port interfaces (Protocols) that define
the contracts between the core domain and external adapters.
"""

from .ingest import ProgressIngestPort
from .dispatch import NotificationSinkPort

__all__ = ["ProgressIngestPort", "NotificationSinkPort"]
