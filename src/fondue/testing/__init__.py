"""Helpers for testing code built on fondue."""

from .helpers import StateRecorder, VirtualClock, wait_for, with_timeout

__all__ = [
    "StateRecorder",
    "VirtualClock",
    "wait_for",
    "with_timeout",
]
