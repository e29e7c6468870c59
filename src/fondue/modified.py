"""Copy-and-mutate helper for values that are awkward to rebuild field by field."""

import copy
from typing import Any, Callable, TypeVar


T = TypeVar("T")


def modified(value: T, mutate: Callable[[T], Any]) -> T:
    """
    Return a modified copy of `value`.

    `mutate` receives a deep copy and changes it in place; whatever it returns
    is ignored. The original value is never touched.

    Example:

        headers = modified(request.headers, lambda h: h.update({"Accept": "text/csv"}))
    """
    clone = copy.deepcopy(value)
    mutate(clone)
    return clone
