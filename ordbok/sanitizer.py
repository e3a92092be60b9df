"""
Heuristic clean-up of field values returned by the text generator. The generator is asked for
bare forms but regularly leaks schema keys ("indefiniteSingular: regel"), adds notes in
parentheses or brackets, and sometimes mentions itself. Every leaf string of an entry goes through
`sanitize` before the entry is cached, recorded or saved.
"""

import re
from typing import Any

from ordbok.constant import PLACEHOLDER

LEAKED_KEY_PATTERN = re.compile(r"[a-z]+[A-Z][A-Za-z]*")
META_PATTERNS = [
    re.compile(r"\(Note:.*?\)", re.IGNORECASE),
    re.compile(r"\(see.*?\)", re.IGNORECASE),
    re.compile(r"\(.*?form.*?\)", re.IGNORECASE),
    re.compile(r"\bLightspeed\b", re.IGNORECASE),
    re.compile(r"\[.*?\]"),
    re.compile(r";"),
]
STRUCTURAL_FIELDS = {"gender", "targetLanguage", "timestamp", "chapterNumber"}


def _split_on_colons(text: str) -> list[str]:
    """Splits on colons that are not inside parentheses or brackets."""
    parts, depth, start = [], 0, 0
    for i, char in enumerate(text):
        if char in "([":
            depth += 1
        elif char in ")]" and depth:
            depth -= 1
        elif char == ":" and not depth:
            parts.append(text[start:i])
            start = i + 1
    parts.append(text[start:])
    return parts


def _is_leaked_key(prefix: str) -> bool:
    prefix = prefix.strip()
    return len(prefix) > 3 and bool(LEAKED_KEY_PATTERN.fullmatch(prefix))


def sanitize(raw: Any) -> str:
    """
    Returns a cleaned version of a generated field value, or the placeholder glyph if nothing
    usable is left. Never raises.
    """
    if not raw or not isinstance(raw, str):
        return PLACEHOLDER

    clean = raw
    parts = _split_on_colons(clean)
    if len(parts) > 1:
        if _is_leaked_key(parts[0]):
            clean = ":".join(parts[1:])
        else:
            clean = parts[-1]

    for pattern in META_PATTERNS:
        clean = pattern.sub("", clean)

    return clean.strip() or PLACEHOLDER


def sanitize_record(value: Any, key: str = "") -> Any:
    """Applies `sanitize` to every leaf string of a raw generated record."""
    if key in STRUCTURAL_FIELDS:
        return value
    if isinstance(value, dict):
        return {k: sanitize_record(v, k) for k, v in value.items()}
    if isinstance(value, list):
        return [sanitize_record(item) for item in value]
    if isinstance(value, str):
        return sanitize(value)
    return value
