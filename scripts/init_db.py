#!/usr/bin/env python3
from __future__ import annotations

import asyncio
import logging
from collections import Counter

from missing_stubs.core.config import settings
from missing_stubs.core.logging_config import setup_logging
from missing_stubs.infra import db
from missing_stubs.infra.migrate import migrate
from missing_stubs.infra.translations_repo import TranslationsRepo

log = logging.getLogger(__name__)


async def main() -> None:
    # Ensure data directory exists for SQLite path
    from pathlib import Path
    Path("data").mkdir(exist_ok=True)

    setup_logging(settings)

    await db.init_engine(settings.DATABASE_URL)
    db.init_sessionmaker()
    await migrate()
    async with db.SessionLocal() as s:  # type: ignore
        pending = await TranslationsRepo(s).list_pending(limit=10_000)
    for locale, n in sorted(Counter(row.locale for row in pending).items()):
        log.info("%s: %d untranslated stub(s)", locale, n)
    await db.dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
