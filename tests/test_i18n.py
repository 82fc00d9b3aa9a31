from __future__ import annotations

import pytest

from conftest import DictSource
from missing_stubs.core.catalog import Catalog
from missing_stubs.core.errors import InvalidLocaleError, MissingTranslationError
from missing_stubs.core.i18n import Translator
from missing_stubs.core.lookup import ChainSource, Found, Missing, pluralize
from missing_stubs.core.options import LookupOptions


@pytest.fixture
def catalog() -> Catalog:
    c = Catalog()
    c.load_locales()
    return c


def test_packaged_locales_are_loaded(catalog: Catalog) -> None:
    assert {"en", "pl"} <= set(catalog.locales)


@pytest.mark.asyncio
async def test_catalog_lookup_nested_and_plural(catalog: Catalog) -> None:
    plurals = await catalog.lookup("pl", "i18n.plural.keys", LookupOptions())
    assert plurals == Found(["zero", "one", "few", "other"])

    assert await catalog.lookup("en", "messages", LookupOptions(scope="inbox", count=0)) == Found("No messages")
    assert await catalog.lookup("en", "inbox.messages", LookupOptions(count=1)) == Found("One message")
    assert await catalog.lookup("en", "inbox.messages", LookupOptions(count=7)) == Found("{count} messages")
    assert await catalog.lookup("pl", "inbox.messages", LookupOptions()) == Missing("pl", "inbox.messages")


@pytest.mark.asyncio
async def test_catalog_store_deep_merges(catalog: Catalog) -> None:
    catalog.store("en", {"inbox": {"title": "Inbox"}})

    assert await catalog.lookup("en", "inbox.title", LookupOptions()) == Found("Inbox")
    assert await catalog.lookup("en", "inbox.messages", LookupOptions(count=1)) == Found("One message")


def test_pluralize_rules() -> None:
    entry = {"one": "1", "other": "n"}
    assert pluralize(entry, 0) == "n"
    assert pluralize({"zero": "0", **entry}, 0) == "0"
    assert pluralize(entry, 1) == "1"
    assert pluralize(entry, None) is entry
    assert pluralize("plain", 5) == "plain"


@pytest.mark.asyncio
async def test_chain_first_hit_wins() -> None:
    first = DictSource({("en", "a"): "from first"})
    second = DictSource({("en", "a"): "from second", ("en", "b"): "only second"})
    chain = ChainSource(first, second)

    assert await chain.lookup("en", "a", LookupOptions()) == Found("from first")
    assert await chain.lookup("en", "b", LookupOptions()) == Found("only second")
    assert await chain.lookup("en", "c", LookupOptions()) == Missing("en", "c")
    assert second.calls == [("en", "b"), ("en", "c")]


@pytest.mark.asyncio
async def test_translator_interpolates_and_raises(catalog: Catalog) -> None:
    translator = Translator(catalog, default_locale="en")

    assert await translator.t("pl", "greeting", name="Bob") == "Cześć, Bob!"
    assert await translator.t("en", "inbox.messages", count=4) == "4 messages"
    # without values the text is returned as is
    assert await translator.t("en", "greeting") == "Hello, {name}!"
    with pytest.raises(MissingTranslationError) as exc:
        await translator.t("pl", "unknown.key")
    assert exc.value.locale == "pl"
    assert exc.value.key == "unknown.key"


@pytest.mark.asyncio
async def test_translator_rejects_unavailable_locale(catalog: Catalog) -> None:
    translator = Translator(catalog, default_locale="en", available_locales=["en", "pl"])

    with pytest.raises(InvalidLocaleError):
        await translator.translate("de", "greeting")


def test_pick_locale(catalog: Catalog) -> None:
    translator = Translator(catalog, default_locale="en", available_locales=["en", "pl"])

    assert translator.pick_locale("pl") == "pl"
    assert translator.pick_locale("pl-PL") == "pl"
    assert translator.pick_locale("de-AT") == "en"
    assert translator.pick_locale(None, fallback="pl") == "pl"
    assert Translator(catalog, default_locale="en").pick_locale("de-AT") == "de-AT"
