"""Tests for the expense category lookup."""

from __future__ import annotations

import pytest

from nairatax.backend.app.services.categories import (
    build_category_table,
    resolve_deductibility,
)
from nairatax.backend.config.engine_config import (
    ExpenseCategory,
    load_engine_configuration,
)


@pytest.mark.parametrize(
    "category, expected",
    [
        ("National Housing Fund (NHF)", True),
        ("national health insurance (nhis)", True),
        ("  Life Assurance Premium ", True),
        ("Rent", False),
        ("Food & Groceries", False),
    ],
)
def test_known_categories_resolve_from_configuration(category: str, expected: bool) -> None:
    assert resolve_deductibility(category, fallback=not expected) is expected


def test_unknown_category_uses_fallback() -> None:
    assert resolve_deductibility("Club Membership", fallback=False) is False
    assert resolve_deductibility("Club Membership", fallback=True) is True


def test_partial_labels_do_not_match() -> None:
    assert resolve_deductibility("NHF", fallback=False) is False


def test_custom_table_overrides_configuration() -> None:
    table = build_category_table(
        [ExpenseCategory(label="Union Dues", tax_deductible=True)]
    )

    assert resolve_deductibility("union dues", fallback=False, table=table) is True
    assert resolve_deductibility("Rent", fallback=True, table=table) is True


def test_category_table_is_read_only() -> None:
    table = build_category_table(load_engine_configuration().expense_categories)

    with pytest.raises(TypeError):
        table["rent"] = True  # type: ignore[index]
