"""
Non-mutating helpers for `httpx.URL`.

    base = literal_url("https://api.example.org/search")
    url = with_parameters(base, {"query": "fondue", "page": 2})
    assert str(url) == "https://api.example.org/search?page=2&query=fondue"
"""

from __future__ import annotations

from typing import Mapping

import httpx

from ..errors import ConfigurationError
from .parameters import (
    ConvertibleParameters,
    Parameters,
    convert_value,
    parse_query,
    serialize_query,
)


def literal_url(text: str) -> httpx.URL:
    """
    Build a URL from a string written in source code.

    A literal that does not parse is a programming mistake, not bad runtime
    input, so it raises `ConfigurationError` instead of returning `None`.
    The process is not aborted: the error propagates like any other and is
    only meant to surface during development, never to be caught.
    """
    if not text or any(char.isspace() for char in text):
        raise ConfigurationError(f"Invalid literal URL string: {text!r}")
    try:
        return httpx.URL(text)
    except httpx.InvalidURL as e:
        raise ConfigurationError(f"Invalid literal URL string: {text!r}") from e


def get_parameters(url: httpx.URL) -> Parameters:
    """The query parameters of `url` as a dict."""
    return parse_query(url.query)


def replace_parameters(url: httpx.URL, parameters: Mapping[str, str]) -> httpx.URL:
    """Return `url` with its whole query replaced. An empty mapping drops the query."""
    query = serialize_query(parameters)
    return url.copy_with(query=query.encode("ascii") if query else None)


def with_parameters(url: httpx.URL, parameters: ConvertibleParameters) -> httpx.URL:
    """
    Return `url` with `parameters` merged into its query.

    A `None` value removes that parameter, any other value is converted to a
    string and overwrites the existing one. Other parameters are untouched.
    """
    merged = get_parameters(url)
    for key, value in parameters.items():
        if value is None:
            merged.pop(key, None)
        else:
            merged[key] = convert_value(value)
    return replace_parameters(url, merged)


def with_fragment(url: httpx.URL, fragment: str | None) -> httpx.URL:
    """Return `url` with its fragment replaced, or removed when `fragment` is None."""
    return url.copy_with(fragment=fragment)


def appending_path(url: httpx.URL, path: str) -> httpx.URL:
    """Return `url` with `path` appended as a new path component."""
    if not path:
        return url
    base = url.raw_path.decode("ascii").partition("?")[0]
    return url.copy_with(path=f"{base.rstrip('/')}/{path.lstrip('/')}")
