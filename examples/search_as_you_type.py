"""
Search-as-you-type Example

Simulates a user typing into a search box that queries a JSON API.

- Every keystroke is submitted to an ObservableProcessor.
- Only the last keystroke in a burst reaches the API (debounce).
- A flaky backend is retried transparently.
- Every state transition is printed by a subscriber.

The API is served by an in-process httpx.MockTransport, so no network is needed.

Run:
  uv run python examples/search_as_you_type.py

Set FONDUE_DEBUG=1 and configure logging to DEBUG to see raw response bodies.
"""

from __future__ import annotations

import logging

import anyio
import httpx

from fondue import (
    ObservableProcessor,
    ProcessorState,
    build_client,
    fetch_json,
    literal_url,
    to_request,
)

API = literal_url("https://api.example.org/v1")

EMPLOYEES = ["Vikram", "Vivian", "Victor", "Valentina", "Ursula"]

calls = 0


def handle(request: httpx.Request) -> httpx.Response:
    global calls
    calls += 1
    # Every third call fails, to show retries.
    if calls % 3 == 0:
        return httpx.Response(503)
    query = request.url.params.get("query", "").lower()
    matches = [name for name in EMPLOYEES if name.lower().startswith(query)]
    return httpx.Response(200, json={"query": query, "results": matches})


def render(state: ProcessorState) -> None:
    spinner = "..." if state.is_busy else "   "
    results = state.output["results"] if state.output else []
    error = f" (error: {state.error})" if state.has_error else ""
    print(f"{spinner} input={state.input!r:12} results={results}{error}")


async def main() -> None:
    logging.basicConfig(level=logging.WARNING)

    async with build_client(transport=httpx.MockTransport(handle)) as client:

        async def search(text: str) -> dict:
            request = to_request(API, path="employees").adding_parameters({"query": text})
            return await fetch_json(request, client=client)

        processor = ObservableProcessor(search).debounce(0.3).timeout(2).retry(2)
        processor.subscribe(render)

        async with processor:
            for text in ["V", "Vi", "Vik"]:
                processor.input = text
                await anyio.sleep(0.1)
            await anyio.sleep(0.5)

            processor.input = "V"
            await anyio.sleep(0.5)

    print(f"API calls: {calls}")


if __name__ == "__main__":
    anyio.run(main)
