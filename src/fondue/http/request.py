"""Immutable outbound request descriptors with "modifier" builders.

Every modifier returns a new `Request`; the receiver is never changed, so a
base request can be shared and specialised freely:

    api = to_request(literal_url("https://api.example.org"), path="employees")
    create = api.with_method(HttpMethod.POST).with_json_body({"name": "Vikram"})
"""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Mapping

import httpx

from ..modified import modified
from .parameters import ConvertibleParameters, serialize_query
from .url import appending_path, with_parameters


JsonEncoder = Callable[[Any], bytes]

TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=utf-8"


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    PATCH = "PATCH"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    model_dump = getattr(value, "model_dump", None)
    if callable(model_dump):
        return model_dump(mode="json")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_json(value: Any) -> bytes:
    """Compact UTF-8 JSON. Dataclasses and pydantic models are dumped first."""
    return json.dumps(
        value,
        default=_json_default,
        separators=(",", ":"),
        ensure_ascii=False,
    ).encode("utf-8")


@dataclass(frozen=True, slots=True)
class Request:
    url: httpx.URL
    method: HttpMethod = HttpMethod.GET
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    body: bytes | None = None

    def __post_init__(self) -> None:
        # Own copy, case-insensitive even when a plain mapping was passed.
        object.__setattr__(self, "headers", httpx.Headers(self.headers))

    def adding_parameters(self, parameters: ConvertibleParameters) -> "Request":
        """Returns a request with URL parameters merged in (`None` removes one)."""
        return replace(self, url=with_parameters(self.url, parameters))

    def adding_headers(self, headers: Mapping[str, str]) -> "Request":
        """Returns a request with merged headers. Existing headers with the same name are overwritten."""
        return replace(self, headers=modified(self.headers, lambda h: h.update(headers)))

    def adding_header(self, name: str, value: str) -> "Request":
        return self.adding_headers({name: value})

    def with_method(self, method: HttpMethod | str) -> "Request":
        return replace(self, method=HttpMethod(method.upper()))

    def with_body(self, body: bytes | None, content_type: str | None = None) -> "Request":
        """Returns a request with a new body and, if given, a new `Content-Type` header."""
        request = replace(self, body=body)
        if content_type is not None:
            request = request.adding_header("Content-Type", content_type)
        return request

    def with_text_body(self, text: str) -> "Request":
        return self.with_body(text.encode("utf-8"), TEXT_CONTENT_TYPE)

    def with_json_body(self, value: Any, encoder: JsonEncoder = encode_json) -> "Request":
        """Returns a request whose body is `value` encoded as JSON."""
        return self.with_body(encoder(value), JSON_CONTENT_TYPE)

    def with_form_body(self, parameters: Mapping[str, str]) -> "Request":
        """Returns a request whose body is `parameters` as a URL-encoded form."""
        return self.with_body(serialize_query(parameters).encode("utf-8"), FORM_CONTENT_TYPE)

    def with_user_agent(self, user_agent: str) -> "Request":
        return self.adding_header("User-Agent", user_agent)

    def to_httpx(self, client: httpx.AsyncClient | httpx.Client | None = None) -> httpx.Request:
        """
        Hand this descriptor over to httpx.

        With a client, its default headers, cookies and base URL are merged in
        the usual httpx way.
        """
        if client is not None:
            return client.build_request(
                self.method.value, self.url, headers=self.headers, content=self.body
            )
        return httpx.Request(self.method.value, self.url, headers=self.headers, content=self.body)


def to_request(
    url: httpx.URL,
    method: HttpMethod | str = HttpMethod.GET,
    path: str | None = None,
) -> Request:
    """
    Creates a request for `url`.

    `path`, when non-empty, is appended to the URL as a new path component.
    """
    if path:
        url = appending_path(url, path)
    return Request(url=url).with_method(method)
