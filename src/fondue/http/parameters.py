"""
Dictionary semantics for URL query strings.

Strictly speaking a query may repeat a name ("a=1&a=2"), and some server-side
frameworks gather those into lists. In most real-life APIs, though, every
parameter is uniquely named, and a plain `dict[str, str]` is far more
convenient to work with than a multidict.
"""

from __future__ import annotations

from functools import partial
from typing import Mapping
from urllib.parse import quote, unquote


Parameters = dict[str, str]
ConvertibleParameters = Mapping[str, object | None]

# Everything except unreserved characters is escaped, so "&" and "=" inside
# keys or values never leak into the query structure.
_encode = partial(quote, safe="")


def parse_query(query: str | bytes | None) -> Parameters:
    """
    Parse a query string into a dict.

    Entries without a value ("flag" as opposed to "flag=") are dropped and,
    for repeated names, only the last occurrence is kept. Malformed pairs are
    skipped rather than rejected.
    """
    if not query:
        return {}
    if isinstance(query, bytes):
        query = query.decode("utf-8", errors="replace")

    parameters: Parameters = {}
    for pair in query.split("&"):
        if not pair:
            continue
        key, separator, value = pair.partition("=")
        if not separator:
            continue
        parameters[unquote(key)] = unquote(value)
    return parameters


def serialize_query(parameters: Mapping[str, str]) -> str:
    """
    Serialize parameters as `a=1&b=2&c=Vikram%20Kriplaney`.

    Keys are sorted so that equal parameter sets always produce equal URLs.
    An empty mapping yields an empty string.
    """
    return "&".join(
        f"{_encode(key)}={_encode(value)}"
        for key, value in sorted(parameters.items())
    )


def convert_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def convert_parameters(parameters: ConvertibleParameters) -> Parameters:
    """Drop `None` values and convert the rest to their string representation."""
    return {
        key: convert_value(value)
        for key, value in parameters.items()
        if value is not None
    }
