"""Asynchronous request-state controller."""

from .observable import ObservableProcessor
from .state import NO_INPUT, ProcessorState

__all__ = [
    "ObservableProcessor",
    "ProcessorState",
    "NO_INPUT",
]
