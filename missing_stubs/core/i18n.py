from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from .errors import InvalidLocaleError, MissingTranslationError
from .flatten import FLATTEN_SEPARATOR
from .lookup import Found, LookupResult, TranslationSource
from .options import LookupOptions


log = logging.getLogger(__name__)


class Translator:
    def __init__(
        self,
        source: TranslationSource,
        default_locale: str,
        available_locales: Optional[Iterable[str]] = None,
        default_separator: str = FLATTEN_SEPARATOR,
    ) -> None:
        self.source = source
        self.default_locale = default_locale
        self.default_separator = default_separator
        self.available_locales = list(available_locales or [])

    def pick_locale(self, requested: Optional[str], fallback: Optional[str] = None) -> str:
        """Map a client language tag (``pl-PL``) onto a known locale."""
        fallback = fallback or self.default_locale
        if not requested:
            return fallback
        if not self.available_locales or requested in self.available_locales:
            return requested
        lc = requested.replace("_", "-").split("-")[0]
        if lc in self.available_locales:
            return lc
        return fallback

    async def translate(self, locale: str, key: Any, **options: Any) -> LookupResult:
        if self.available_locales and locale not in self.available_locales:
            raise InvalidLocaleError(locale)
        opts = LookupOptions.from_kwargs(**options)
        # every source flattens with the same separator
        if opts.separator is None:
            opts.separator = self.default_separator
        result = await self.source.lookup(locale, key, opts)
        if isinstance(result, Found) and isinstance(result.value, str):
            return Found(interpolate(result.value, opts))
        return result

    async def t(self, locale: str, key: Any, **options: Any) -> Any:
        result = await self.translate(locale, key, **options)
        if isinstance(result, Found):
            return result.value
        raise MissingTranslationError(result.locale, result.key)


def interpolate(msg: str, options: LookupOptions) -> str:
    values = options.format_values()
    if not values:
        return msg
    try:
        return msg.format(**values)
    except (KeyError, IndexError, ValueError) as e:
        log.debug("Could not interpolate %r: %s", msg, e)
        return msg
