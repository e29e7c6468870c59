"""Ergonomic URL, request and async-state helpers on top of httpx and AnyIO."""

import logging

from .clock import Clock, SystemClock
from .config import FondueSettings, get_settings
from .errors import ConfigurationError, FondueError, ProcessorError, ProcessorTimeout
from .http import (
    HttpMethod,
    Request,
    build_client,
    convert_parameters,
    dump_json,
    fetch_json,
    fetch_status,
    get_parameters,
    literal_url,
    parse_query,
    replace_parameters,
    serialize_query,
    to_request,
    with_fragment,
    with_parameters,
)
from .modified import modified
from .processor import NO_INPUT, ObservableProcessor, ProcessorState

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core helpers
    "modified",
    "Clock",
    "SystemClock",
    # Configuration
    "FondueSettings",
    "get_settings",
    # Errors
    "FondueError",
    "ConfigurationError",
    "ProcessorError",
    "ProcessorTimeout",
    # URLs and parameters
    "literal_url",
    "get_parameters",
    "replace_parameters",
    "with_parameters",
    "with_fragment",
    "parse_query",
    "serialize_query",
    "convert_parameters",
    # Requests
    "HttpMethod",
    "Request",
    "to_request",
    "build_client",
    "fetch_json",
    "fetch_status",
    "dump_json",
    # Processors
    "ObservableProcessor",
    "ProcessorState",
    "NO_INPUT",
]
