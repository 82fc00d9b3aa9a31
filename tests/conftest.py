from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import pytest
import pytest_asyncio

from missing_stubs.core.flatten import flatten_key
from missing_stubs.core.lookup import Found, LookupResult, Missing
from missing_stubs.core.options import LookupOptions
from missing_stubs.infra import db
from missing_stubs.infra.migrate import migrate


class FakeRecord:
    def __init__(self, locale: str, key: str, value: Optional[str] = None) -> None:
        self.locale = locale
        self.key = key
        self.value = value
        self.interpolations: List[str] = []


class FakeStubStore:
    def __init__(self, existing: Optional[Dict[Tuple[str, str], Optional[str]]] = None, fail_on_save: int = 0) -> None:
        self.rows: Dict[Tuple[str, str], FakeRecord] = {}
        for (locale, key), value in (existing or {}).items():
            self.rows[(locale, key)] = FakeRecord(locale, key, value)
        self.exists_calls: List[Tuple[str, str]] = []
        self.writes: List[Tuple[str, str, Optional[str], List[str]]] = []
        self.fail_on_save = fail_on_save

    async def exists(self, locale: str, key: str) -> bool:
        self.exists_calls.append((locale, key))
        return any(l == locale and (k == key or k.startswith(key + ".")) for l, k in self.rows)

    async def find_or_create(self, locale: str, key: str) -> FakeRecord:
        return self.rows.get((locale, key)) or FakeRecord(locale, key)

    async def save(self, record: FakeRecord) -> None:
        if self.fail_on_save and len(self.writes) + 1 == self.fail_on_save:
            raise RuntimeError("disk full")
        self.rows[(record.locale, record.key)] = record
        self.writes.append((record.locale, record.key, record.value, list(record.interpolations)))


class DictSource:
    """Source answering from a flat ``{(locale, key): value}`` mapping."""

    def __init__(self, data: Optional[Dict[Tuple[str, str], Any]] = None, error: Optional[Exception] = None) -> None:
        self.data = data or {}
        self.error = error
        self.calls: List[Tuple[str, str]] = []

    async def lookup(self, locale: str, key: Any, options: LookupOptions) -> LookupResult:
        flat_key = flatten_key(key, options.scope, options.separator)
        self.calls.append((locale, flat_key))
        if self.error is not None:
            raise self.error
        if (locale, flat_key) in self.data:
            return Found(self.data[(locale, flat_key)])
        return Missing(locale, flat_key)


class StoreBackedSource:
    """Source reading non-null values straight out of a FakeStubStore."""

    def __init__(self, store: FakeStubStore) -> None:
        self.store = store

    async def lookup(self, locale: str, key: Any, options: LookupOptions) -> LookupResult:
        flat_key = flatten_key(key, options.scope, options.separator)
        record = self.store.rows.get((locale, flat_key))
        if record is None or record.value is None:
            return Missing(locale, flat_key)
        return Found(record.value)


@pytest.fixture
def store() -> FakeStubStore:
    return FakeStubStore()


@pytest_asyncio.fixture
async def sessionmaker(tmp_path):
    await db.init_engine(f"sqlite+aiosqlite:///{tmp_path / 'translations.db'}")
    db.init_sessionmaker()
    await migrate()
    yield db.SessionLocal
    await db.dispose_engine()
