from __future__ import annotations

from typing import Any, Iterable, List

FLATTEN_SEPARATOR = "."
SEPARATOR_ESCAPE_CHAR = "\x01"


def _segments(part: Any) -> Iterable[Any]:
    if part is None:
        return
    if isinstance(part, (list, tuple)):
        for item in part:
            yield from _segments(item)
    else:
        yield part


def flatten_key(key: Any, scope: Any = None, separator: str | None = None) -> str:
    """Merge ``scope`` and ``key`` into a single dotted lookup key.

    Both may be strings or nested sequences of segments. With a custom
    separator, literal dots inside segments are escaped so they survive the
    round trip, and the custom separator becomes the flat ``"."``.
    """
    keys = [*_segments(scope), *_segments(key)]
    separator = separator or FLATTEN_SEPARATOR
    if separator != FLATTEN_SEPARATOR:
        keys = [
            str(k).replace(FLATTEN_SEPARATOR, SEPARATOR_ESCAPE_CHAR).replace(separator, FLATTEN_SEPARATOR)
            for k in keys
        ]
    return FLATTEN_SEPARATOR.join(str(k) for k in keys)


def unflatten_segments(flat_key: str) -> List[str]:
    parts = strip_dots(flat_key).split(FLATTEN_SEPARATOR)
    return [p.replace(SEPARATOR_ESCAPE_CHAR, FLATTEN_SEPARATOR) for p in parts if p]


def strip_dots(flat_key: str) -> str:
    if flat_key.startswith(FLATTEN_SEPARATOR):
        flat_key = flat_key[1:]
    if flat_key.endswith(FLATTEN_SEPARATOR):
        flat_key = flat_key[:-1]
    return flat_key
