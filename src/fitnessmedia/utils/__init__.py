"""
Utility helpers for the FitnessMedia application.

This module contains the small pieces shared by the services and views:
change notification, the UI-thread delivery queue and logging setup.
"""

from .dispatch import MainThreadQueue
from .events import EventEmitter
from .log import configure_logging

__all__ = ["EventEmitter", "MainThreadQueue", "configure_logging"]
