"""Observable state of an ObservableProcessor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic

from ..type_utils import I, O


class _NoInput:
    """Input used by processors that take no meaningful argument."""

    _instance: "_NoInput | None" = None

    def __new__(cls) -> "_NoInput":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_INPUT"


NO_INPUT = _NoInput()


@dataclass(frozen=True, slots=True)
class ProcessorState(Generic[I, O]):
    """
    One consistent snapshot of a processor's facets.

    Attributes:
        input: The last submitted input, or None
        output: The last successful output; kept across later failures
        is_busy: Whether an attempt is currently running
        error: The last failure of the latest cycle, cleared on success
    """
    input: I | None = None
    output: O | None = None
    is_busy: bool = False
    error: BaseException | None = None

    @property
    def has_error(self) -> bool:
        return self.error is not None
