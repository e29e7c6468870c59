"""Development-only dumping of raw response bodies."""

from __future__ import annotations

import json
import logging

from ..config import get_settings


logger = logging.getLogger(__name__)


def dump_json(data: bytes, title: str | None = None, *, enabled: bool | None = None) -> bytes:
    """
    Log `data` pretty-printed as JSON, falling back to plain text.

    Only active when `enabled` (default: the `debug` setting). Returns `data`
    unchanged so it can be dropped into a pipeline, and never raises.
    """
    if enabled is None:
        enabled = get_settings().debug
    if not enabled:
        return data

    logger.debug(f"----- {title or 'JSON Dump'} -----")
    try:
        text = json.dumps(json.loads(data), indent=2, ensure_ascii=False)
    except ValueError:
        # Not JSON (or not decodable as such)
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError:
            text = "Unknown data encoding"
    logger.debug(text)
    return data
