"""
Orchestrators for dclone-tracker.

This module contains the poll cycle and the scheduler that
coordinate the flow between ports and adapters.
"""
from .poll_cycle import PollCycle
from .scheduler import Scheduler, State

__all__ = ["PollCycle", "Scheduler", "State"]
