"""Label and message catalogues packaged as JSON under ``nairatax.translations``.

Each locale file holds two sections: ``labels`` name the result fields and
salary tiers shown next to a calculation, ``messages`` are the templates for
validation errors. Templates use ``str.format`` placeholders, for example
``"Enter earnings for {label}."``.
"""

from __future__ import annotations

import json
from collections import ChainMap
from dataclasses import dataclass
from functools import cache
from importlib import resources
from typing import Any, Mapping

BASE_LOCALE = "en"
_TRANSLATIONS_PACKAGE = "nairatax.translations"
_SECTIONS = ("labels", "messages")


@dataclass(frozen=True)
class Catalogue:
    """Labels and message templates for one locale."""

    locale: str
    labels: Mapping[str, str]
    messages: Mapping[str, str]

    def entries(self) -> Mapping[str, str]:
        return ChainMap(dict(self.labels), dict(self.messages))


@dataclass(frozen=True)
class Translator:
    """Callable lookup of catalogue entries with a base-locale fallback.

    Unknown keys are returned unchanged so a missing entry shows up in the
    response instead of failing the request.
    """

    locale: str
    _entries: Mapping[str, str]
    _fallback: Mapping[str, str]

    def __call__(self, key: str) -> str:
        return self._entries.get(key) or self._fallback.get(key, key)

    def format(self, key: str, **params: Any) -> str:
        """Return the template for ``key`` with ``params`` substituted."""

        return self(key).format(**params)


class LocalizedError(ValueError):
    """``ValueError`` whose text is rendered from a catalogue message.

    ``str(error)`` is the message in ``translator``'s locale (the base locale
    when omitted). :meth:`render` re-renders it for another locale, which is
    how errors raised inside pydantic validators reach the caller's language.
    """

    def __init__(self, key: str, /, translator: Translator | None = None, **params: Any):
        self.key = key
        self.params = params
        super().__init__(self.render(translator or get_translator()))

    def render(self, translator: Translator) -> str:
        return translator.format(self.key, **self.params)


@cache
def _available_locales() -> tuple[str, ...]:
    root = resources.files(_TRANSLATIONS_PACKAGE)
    locales = sorted(
        entry.name.removesuffix(".json")
        for entry in root.iterdir()
        if entry.name.endswith(".json")
    )
    return tuple(locales) or (BASE_LOCALE,)


@cache
def _load_catalogue(locale: str) -> Catalogue:
    resource = resources.files(_TRANSLATIONS_PACKAGE).joinpath(f"{locale}.json")
    payload: dict[str, Any] = {}
    if resource.is_file():
        with resource.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)

    sections = {}
    for section in _SECTIONS:
        values = payload.get(section) or {}
        sections[section] = {str(key): str(value) for key, value in values.items()}
    return Catalogue(locale=locale, **sections)


def normalise_locale(locale: str | None) -> str:
    """Map ``en-NG``, ``en_GB`` and the like onto a published catalogue."""

    if not locale:
        return BASE_LOCALE

    language = locale.strip().lower().replace("_", "-").split("-")[0]
    return language if language in _available_locales() else BASE_LOCALE


def get_translator(locale: str | None = None) -> Translator:
    """Return a translator for ``locale`` falling back to the base locale."""

    catalogue = _load_catalogue(normalise_locale(locale))
    return Translator(
        locale=catalogue.locale,
        _entries=catalogue.entries(),
        _fallback=_load_catalogue(BASE_LOCALE).entries(),
    )


def load_translations(locale: str | None = None) -> dict[str, Any]:
    """Return the catalogue payload served to API clients."""

    catalogue = _load_catalogue(normalise_locale(locale))
    base = _load_catalogue(BASE_LOCALE)

    return {
        "locale": catalogue.locale,
        "available_locales": list(_available_locales()),
        "labels": dict(catalogue.labels),
        "messages": dict(catalogue.messages),
        "fallback": {
            "locale": base.locale,
            "labels": dict(base.labels),
            "messages": dict(base.messages),
        },
    }


__all__ = [
    "BASE_LOCALE",
    "Catalogue",
    "LocalizedError",
    "Translator",
    "get_translator",
    "load_translations",
    "normalise_locale",
]
