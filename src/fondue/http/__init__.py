"""URL, query-parameter and request helpers built on httpx."""

from .debug import dump_json
from .parameters import (
    ConvertibleParameters,
    Parameters,
    convert_parameters,
    parse_query,
    serialize_query,
)
from .request import HttpMethod, Request, encode_json, to_request
from .transport import build_client, fetch_json, fetch_status
from .url import (
    appending_path,
    get_parameters,
    literal_url,
    replace_parameters,
    with_fragment,
    with_parameters,
)

__all__ = [
    # Query parameters
    "Parameters",
    "ConvertibleParameters",
    "parse_query",
    "serialize_query",
    "convert_parameters",
    # URLs
    "literal_url",
    "get_parameters",
    "replace_parameters",
    "with_parameters",
    "with_fragment",
    "appending_path",
    # Requests
    "HttpMethod",
    "Request",
    "to_request",
    "encode_json",
    # Transport
    "build_client",
    "fetch_json",
    "fetch_status",
    "dump_json",
]
