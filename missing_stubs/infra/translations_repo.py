from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..core.flatten import FLATTEN_SEPARATOR, flatten_key, strip_dots, unflatten_segments
from ..core.lookup import Found, LookupResult, Missing, pluralize
from ..core.options import LookupOptions
from .models import Translation

log = logging.getLogger(__name__)


def _key_or_children(key: str):
    # exact key, or anything namespaced under it
    return or_(Translation.key == key, Translation.key.startswith(key + FLATTEN_SEPARATOR, autoescape=True))


class TranslationsRepo:
    def __init__(self, session: AsyncSession) -> None:
        self.s = session

    async def lookup(self, locale: str, key: str) -> list[Translation]:
        q = (
            select(Translation)
            .where(Translation.locale == locale, _key_or_children(key))
            .order_by(Translation.id.asc())
        )
        return list((await self.s.execute(q)).scalars().all())

    async def exists(self, locale: str, key: str) -> bool:
        q = select(Translation.id).where(Translation.locale == locale, _key_or_children(key)).limit(1)
        return (await self.s.execute(q)).first() is not None

    async def first_or_initialize(self, locale: str, key: str) -> Translation:
        q = select(Translation).where(Translation.locale == locale, Translation.key == key)
        row = (await self.s.execute(q)).scalars().first()
        if row is None:
            row = Translation(locale=locale, key=key, value=None, interpolations=[])
        return row

    async def list_pending(self, locale: Optional[str] = None, limit: int = 100) -> list[Translation]:
        q = select(Translation).where(Translation.value.is_(None))
        if locale is not None:
            q = q.where(Translation.locale == locale)
        q = q.order_by(Translation.locale.asc(), Translation.key.asc()).limit(limit)
        return list((await self.s.execute(q)).scalars().all())

    async def set_value(self, locale: str, key: str, value: Optional[str]) -> Translation:
        row = await self.first_or_initialize(locale, key)
        row.value = value
        self.s.add(row)
        await self.s.flush()
        return row


class DatabaseStubStore:
    """Stub store backed by the translations table, one transaction per write."""

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        self.sessionmaker = sessionmaker

    async def exists(self, locale: str, key: str) -> bool:
        async with self.sessionmaker() as session:
            return await TranslationsRepo(session).exists(locale, key)

    async def find_or_create(self, locale: str, key: str) -> Translation:
        async with self.sessionmaker() as session:
            return await TranslationsRepo(session).first_or_initialize(locale, key)

    async def save(self, record: Translation) -> None:
        async with self.sessionmaker() as session:
            await session.merge(record)
            await session.commit()


class DatabaseSource:
    """Translation source reading values translators have filled in."""

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        self.sessionmaker = sessionmaker

    async def lookup(self, locale: str, key: Any, options: LookupOptions) -> LookupResult:
        flat_key = strip_dots(flatten_key(key, options.scope, options.separator))
        async with self.sessionmaker() as session:
            rows = await TranslationsRepo(session).lookup(locale, flat_key)

        entry: Any = None
        for row in rows:
            if row.key == flat_key:
                entry = row.value
                break
        else:
            nested: Dict[str, Any] = {}
            for row in rows:
                parts = unflatten_segments(row.key[len(flat_key) + 1:])
                if row.value is None or not parts:
                    continue
                node = nested
                *parents, leaf = parts
                for part in parents:
                    node = node.setdefault(part, {})
                    if not isinstance(node, dict):
                        break
                else:
                    node[leaf] = row.value
            entry = nested or None

        entry = pluralize(entry, options.count)
        if entry is None:
            return Missing(locale, flat_key)
        return Found(entry)
