"""Lookup table mapping well-known expense labels to their deductibility."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from nairatax.backend.config.engine_config import (
    ExpenseCategory,
    load_engine_configuration,
)


def _normalise(label: str) -> str:
    return label.strip().casefold()


def build_category_table(categories: Iterable[ExpenseCategory]) -> Mapping[str, bool]:
    """Return a read-only mapping of normalised label to deductibility flag."""

    return MappingProxyType(
        {_normalise(entry.label): entry.tax_deductible for entry in categories}
    )


def resolve_deductibility(
    category: str,
    fallback: bool,
    *,
    table: Mapping[str, bool] | None = None,
) -> bool:
    """Return the deductibility of ``category`` or ``fallback`` when unknown.

    Matching ignores case and surrounding whitespace but is otherwise exact.
    """

    lookup = table
    if lookup is None:
        lookup = build_category_table(load_engine_configuration().expense_categories)

    return lookup.get(_normalise(category), fallback)


__all__ = ["build_category_table", "resolve_deductibility"]
