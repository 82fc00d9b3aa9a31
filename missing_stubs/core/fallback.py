"""Persist stub records for missing translations.

Wrapping a translation source with :class:`MissingStubWrapper` means every
lookup miss leaves a stub row behind for translators, in the canonical
locale (carrying the caller's default text, if any), in the requested
locale and in the system default locale. The lookup is then retried against
the canonical locale, so a caller that supplied a default gets it back.

When the lookup is pluralizable (``count`` given), one stub is written per
plural category declared for the locale under ``i18n.plural.keys``, e.g.
``greeting.zero``, ``greeting.one``, ``greeting.other``. Interpolation
variable names are stored with each stub so translators can see which
placeholders they must keep.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Protocol, Sequence

from .flatten import FLATTEN_SEPARATOR, flatten_key
from .lookup import Found, LookupResult, Missing, TranslationSource
from .options import LookupOptions, cleanup_default

log = logging.getLogger(__name__)

PLURAL_KEYS_PATH = "i18n.plural.keys"
DEFAULT_PLURAL_KEYS = ("zero", "one", "other")


class StubRecord(Protocol):
    value: Optional[str]
    interpolations: List[str]


class StubStore(Protocol):
    async def exists(self, locale: str, key: str) -> bool:
        ...

    async def find_or_create(self, locale: str, key: str) -> StubRecord:
        ...

    async def save(self, record: StubRecord) -> None:
        ...


class FallbackResolver:
    def __init__(
        self,
        store: StubStore,
        plural_source: TranslationSource,
        default_locale: str,
        default_separator: str = FLATTEN_SEPARATOR,
    ) -> None:
        self.store = store
        self.plural_source = plural_source
        self.default_locale = default_locale
        self.default_separator = default_separator

    async def resolve_and_store(self, locale: str, key: Any, options: LookupOptions) -> str:
        """Write missing stubs for ``key`` and return the canonical locale."""
        separator = options.separator or self.default_separator
        default_locale = options.default_locale or self.default_locale
        flat_key = flatten_key(key, options.scope, separator)

        if await self.store.exists(locale, flat_key):
            log.debug("Stub for %s.%s already present", locale, flat_key)
            return default_locale

        interpolations = options.interpolation_keys()
        plural = await self.plural_keys(locale)
        if options.count is not None and isinstance(plural, (list, tuple)):
            keys = [FLATTEN_SEPARATOR.join((flat_key, str(k))) for k in plural]
        else:
            keys = [flat_key]

        value = cleanup_default(options.default)
        for stub_key in keys:
            if not await self.store.exists(default_locale, stub_key):
                await self._store_stub(default_locale, stub_key, interpolations, value)
            if locale != default_locale and not await self.store.exists(locale, stub_key):
                await self._store_stub(locale, stub_key, interpolations, None)
            if (
                self.default_locale not in (default_locale, locale)
                and not await self.store.exists(self.default_locale, stub_key)
            ):
                await self._store_stub(self.default_locale, stub_key, interpolations, None)
        return default_locale

    async def plural_keys(self, locale: str) -> Any:
        try:
            result = await self.plural_source.lookup(locale, PLURAL_KEYS_PATH, LookupOptions())
        except Exception as e:
            log.debug("Plural keys lookup for %s failed: %s", locale, e)
            return list(DEFAULT_PLURAL_KEYS)
        if isinstance(result, Missing):
            return list(DEFAULT_PLURAL_KEYS)
        return result.value

    async def _store_stub(
        self, locale: str, key: str, interpolations: Sequence[str], value: Optional[str]
    ) -> None:
        record = await self.store.find_or_create(locale, key)
        record.value = value
        record.interpolations = list(interpolations)
        await self.store.save(record)
        log.info("Stored translation stub %s.%s (default=%r)", locale, key, value)


class MissingStubWrapper:
    """A translation source that records misses before retrying once."""

    def __init__(self, source: TranslationSource, resolver: FallbackResolver) -> None:
        self.source = source
        self.resolver = resolver

    async def lookup(self, locale: str, key: Any, options: LookupOptions) -> LookupResult:
        result = await self.source.lookup(locale, key, options)
        if isinstance(result, Found):
            return result
        resolved = await self.resolver.resolve_and_store(locale, key, options)
        return await self.source.lookup(resolved, key, options)
