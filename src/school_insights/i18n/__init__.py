"""Localized phrase tables (English and Arabic)."""

from .phrases import (
    DEFAULT_LOCALE,
    PhraseTable,
    available_locales,
    get_phrases,
    resolve_locale,
)

__all__ = [
    'DEFAULT_LOCALE',
    'PhraseTable',
    'available_locales',
    'get_phrases',
    'resolve_locale',
]
