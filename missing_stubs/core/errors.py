from __future__ import annotations


class I18nError(Exception):
    """Base class for translation lookup errors."""


class MissingTranslationError(I18nError):
    def __init__(self, locale: str, key: str) -> None:
        self.locale = locale
        self.key = key
        super().__init__(f"translation missing: {locale}.{key}")


class InvalidLocaleError(I18nError):
    def __init__(self, locale: str) -> None:
        self.locale = locale
        super().__init__(f"{locale!r} is not a valid locale")
