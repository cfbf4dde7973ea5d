"""Catalogue lookups for result labels and validation messages."""

from .catalog import (
    BASE_LOCALE,
    LocalizedError,
    Translator,
    get_translator,
    load_translations,
    normalise_locale,
)

__all__ = [
    "BASE_LOCALE",
    "LocalizedError",
    "Translator",
    "get_translator",
    "load_translations",
    "normalise_locale",
]
