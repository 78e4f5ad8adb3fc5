from __future__ import annotations

import json

FORMAT_JSON = "json"
FORMAT_ERASER = "eraser"
FORMAT_UNKNOWN = "unknown"

_ERASER_MARKERS = ("direction right", "Group ", "[icon:", "aws-", "git-branch")
_ERASER_MARKER_PAIRS = (("[label:", "icon:"), ("{", "icon:"))


def detect_format(text: str) -> str:
    if not text or not text.strip():
        return FORMAT_UNKNOWN
    if is_structured_payload(text):
        return FORMAT_JSON
    if any(marker in text for marker in _ERASER_MARKERS):
        return FORMAT_ERASER
    if any(first in text and second in text for first, second in _ERASER_MARKER_PAIRS):
        return FORMAT_ERASER
    return FORMAT_UNKNOWN


def is_structured_payload(text: str) -> bool:
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        return False
    return isinstance(parsed, dict) and bool(parsed.get("version")) and "boardItems" in parsed
