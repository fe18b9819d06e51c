"""Per-locale phrase tables backing every user-visible string.

Tables are YAML files under ``locales/`` with ``string.Template`` placeholders.
All locales carry the same keys, so switching language never changes the
shape of what the composer or classifier produces.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from functools import lru_cache
from pathlib import Path
from string import Template
from typing import Any, Dict, List, Optional

import yaml


logger = logging.getLogger(__name__)

LOCALES_DIR = Path(__file__).parent / "locales"
DEFAULT_LOCALE = "en"


def available_locales() -> List[str]:
    """List locale codes that have a phrase table on disk."""
    return sorted(path.stem for path in LOCALES_DIR.glob("*.yaml"))


def resolve_locale(locale: Optional[str], default: str = DEFAULT_LOCALE) -> str:
    """
    Map a requested locale onto an available phrase table.

    Region subtags are dropped (``ar-TN`` -> ``ar``); anything unknown
    resolves to ``default``, and to ``en`` if the default itself is unknown.
    """
    supported = available_locales()
    if locale:
        language = locale.strip().replace("_", "-").split("-")[0].lower()
        if language in supported:
            return language
    if default in supported:
        return default
    return DEFAULT_LOCALE


@dataclass
class PhraseTable:
    """Phrases for a single locale."""
    locale: str
    data: Dict[str, Any] = field(default_factory=dict)

    def raw(self, path: str) -> Any:
        """Look up a dotted key path, e.g. ``alerts.teacher_critical.title``."""
        node: Any = self.data
        for part in path.split("."):
            if not isinstance(node, dict) or part not in node:
                raise KeyError(f"Phrase '{path}' missing from '{self.locale}' table")
            node = node[part]
        return node

    def render(self, path: str, **variables: Any) -> str:
        """Render a single phrase with its placeholders substituted."""
        return self._substitute(path, self.raw(path), variables)

    def render_list(self, path: str, **variables: Any) -> List[str]:
        """Render every phrase of a list-valued key, preserving order."""
        return [self._substitute(path, item, variables) for item in self.raw(path)]

    @property
    def unknown(self) -> str:
        """Placeholder shown for values that are not available."""
        return self.data.get("unknown", "N/A")

    def school_type_label(self, bucket: str) -> str:
        return self.raw("school_types").get(bucket, self.raw("school_types.other"))

    def format_date(self, day: date) -> str:
        """Long date with weekday, month name and year in this locale."""
        return self.render(
            "date.format",
            weekday=self.raw("date.weekdays")[day.weekday()],
            month=self.raw("date.months")[day.month - 1],
            day=day.day,
            year=day.year,
        )

    def _substitute(self, path: str, text: str, variables: Dict[str, Any]) -> str:
        try:
            return Template(text).substitute(variables)
        except KeyError as e:
            raise ValueError(f"Phrase '{path}' rendering failed: missing variable {e}")


@lru_cache(maxsize=None)
def _load_table(locale: str) -> PhraseTable:
    path = LOCALES_DIR / f"{locale}.yaml"
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    logger.debug(f"Loaded phrase table '{locale}' from {path}")
    return PhraseTable(locale=locale, data=data)


def get_phrases(locale: Optional[str] = None, default: str = DEFAULT_LOCALE) -> PhraseTable:
    """Return the phrase table for ``locale``, falling back to ``default``."""
    return _load_table(resolve_locale(locale, default))
