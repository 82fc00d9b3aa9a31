from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Option names understood by the lookup chain itself; they never become
# interpolation variables.
OPTION_FIELDS = ("count", "scope", "default", "separator", "default_locale")

# Names reserved by host frameworks. Accepted and dropped.
RESERVED_KEYS = frozenset(
    {
        "_fallback_in_progress",
        "_fallback_original_locale",
        "cascade",
        "deep_interpolation",
        "exception_handler",
        "fallback",
        "fallback_in_progress",
        "fallback_original_locale",
        "format",
        "locale",
        "object",
        "raise",
        "rescue_format",
        "throw",
    }
)


@dataclass
class LookupOptions:
    count: Optional[int] = None
    scope: Any = None
    default: Any = None
    separator: Optional[str] = None
    default_locale: Optional[str] = None
    values: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_kwargs(cls, **kwargs: Any) -> "LookupOptions":
        known: Dict[str, Any] = {}
        values: Dict[str, Any] = {}
        for name, value in kwargs.items():
            if name in OPTION_FIELDS:
                known[name] = value
            elif name in RESERVED_KEYS:
                continue
            else:
                values[name] = value
        return cls(values=values, **known)

    def interpolation_keys(self) -> List[str]:
        return list(self.values)

    def format_values(self) -> Dict[str, Any]:
        if self.count is None:
            return dict(self.values)
        return {"count": self.count, **self.values}


def cleanup_default(default: Any) -> Optional[str]:
    """Reduce a caller-supplied default to the text stored on a stub."""
    if isinstance(default, (list, tuple)):
        default = default[0] if default else None
    if not isinstance(default, str):
        return None
    return default
