import logging
from typing import Any, Dict, Sequence
from urllib.parse import SplitResult, urlsplit

logger = logging.getLogger(__name__)

ShortcutMap = Dict[str, SplitResult]


def parse_destination(value: str) -> SplitResult:
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in value):
        raise ValueError("invalid control character in URL")
    return urlsplit(value)


def build_shortcut_map(rows: Sequence[Sequence[Any]]) -> ShortcutMap:
    out: ShortcutMap = {}
    for row in rows:
        if len(row) < 2:
            continue
        shortcut, destination = row[0], row[1]
        if not isinstance(shortcut, str) or not shortcut:
            continue
        if not isinstance(destination, str) or not destination:
            continue
        key = shortcut.lower()
        try:
            url = parse_destination(destination)
        except ValueError:
            logger.warning("%s=%s url is invalid", key, destination)
            continue
        if key in out:
            logger.warning("shortcut %r redeclared, overwriting", key)
        out[key] = url
    return out
