from __future__ import annotations

import logging
from typing import Optional

from .core.catalog import Catalog
from .core.config import Settings, settings as default_settings
from .core.fallback import FallbackResolver, MissingStubWrapper
from .core.i18n import Translator
from .core.lookup import ChainSource
from .infra import db
from .infra.migrate import migrate
from .infra.translations_repo import DatabaseSource, DatabaseStubStore

log = logging.getLogger(__name__)


async def create_translator(
    settings: Optional[Settings] = None, catalog: Optional[Catalog] = None
) -> Translator:
    """Wire the database-backed chain with stub recording on misses."""
    settings = settings or default_settings

    await db.init_engine(settings.DATABASE_URL)
    db.init_sessionmaker()
    await migrate()
    assert db.SessionLocal is not None

    if catalog is None:
        catalog = Catalog()
        catalog.load_locales()

    chain = ChainSource(DatabaseSource(db.SessionLocal), catalog)
    resolver = FallbackResolver(
        DatabaseStubStore(db.SessionLocal),
        chain,
        default_locale=settings.DEFAULT_LOCALE,
        default_separator=settings.DEFAULT_SEPARATOR,
    )
    log.info(
        "Translator ready (default locale=%s, catalog locales=%s)",
        settings.DEFAULT_LOCALE,
        ",".join(catalog.locales) or "-",
    )
    return Translator(
        MissingStubWrapper(chain, resolver),
        default_locale=settings.DEFAULT_LOCALE,
        available_locales=settings.AVAILABLE_LOCALES,
        default_separator=settings.DEFAULT_SEPARATOR,
    )
