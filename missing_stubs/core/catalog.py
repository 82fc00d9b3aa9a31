from __future__ import annotations

import json
import logging
from importlib import resources
from typing import Any, Dict, Iterable, List, Optional

from .flatten import flatten_key, unflatten_segments
from .lookup import Found, LookupResult, Missing, pluralize
from .options import LookupOptions

log = logging.getLogger(__name__)


def _deep_merge(target: Dict[str, Any], data: Dict[str, Any]) -> None:
    for k, v in data.items():
        if isinstance(v, dict) and isinstance(target.get(k), dict):
            _deep_merge(target[k], v)
        else:
            target[k] = v


class Catalog:
    """In-memory nested translations, seeded from packaged JSON files."""

    def __init__(self, package: str = "missing_stubs.locales") -> None:
        self.package = package
        self._messages: Dict[str, Dict[str, Any]] = {}

    def load_locales(self, locales: Optional[Iterable[str]] = None) -> None:
        root = resources.files(self.package)
        if locales is None:
            names = sorted(p.name for p in root.iterdir() if p.name.endswith(".json"))
        else:
            names = [f"{lang}.json" for lang in locales]
        for name in names:
            lang = name[: -len(".json")]
            try:
                data = json.loads(root.joinpath(name).read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                log.warning("Failed to load locale %s: %s", lang, e)
                continue
            self.store(lang, data)

    def store(self, locale: str, data: Dict[str, Any]) -> None:
        _deep_merge(self._messages.setdefault(locale, {}), data)

    @property
    def locales(self) -> List[str]:
        return list(self._messages)

    def _walk(self, locale: str, flat_key: str) -> Any:
        node: Any = self._messages.get(locale)
        for part in unflatten_segments(flat_key):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    async def lookup(self, locale: str, key: Any, options: LookupOptions) -> LookupResult:
        flat_key = flatten_key(key, options.scope, options.separator)
        entry = pluralize(self._walk(locale, flat_key), options.count)
        if entry is None:
            return Missing(locale, flat_key)
        return Found(entry)
