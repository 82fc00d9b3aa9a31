from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Union

from .options import LookupOptions

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Found:
    value: Any


@dataclass(frozen=True)
class Missing:
    locale: str
    key: Any


LookupResult = Union[Found, Missing]


class TranslationSource(Protocol):
    async def lookup(self, locale: str, key: Any, options: LookupOptions) -> LookupResult:
        ...


def pluralize(entry: Any, count: Optional[int]) -> Any:
    """Pick the plural form of ``entry`` for ``count``.

    Only dict entries are pluralized; ``zero`` is used for a count of 0 when
    the entry defines it, then ``one`` for 1 and ``other`` for anything else.
    """
    if count is None or not isinstance(entry, dict):
        return entry
    if count == 0 and "zero" in entry:
        return entry["zero"]
    return entry.get("one" if count == 1 else "other")


class ChainSource:
    """Ask each source in turn; the first hit wins."""

    def __init__(self, *sources: TranslationSource) -> None:
        self.sources = list(sources)

    async def lookup(self, locale: str, key: Any, options: LookupOptions) -> LookupResult:
        for source in self.sources:
            result = await source.lookup(locale, key, options)
            if isinstance(result, Found):
                return result
        log.debug("No source in chain has %s for %r", locale, key)
        return Missing(locale, key)
