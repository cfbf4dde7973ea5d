"""Utility helpers for calculator modules."""

from __future__ import annotations

from collections.abc import Sequence

from nairatax.backend.config.engine_config import TaxBand


def format_percentage(value: float) -> str:
    """Return a human-readable percentage label for ``value``."""

    percentage = round(value * 100, 6)
    if float(int(percentage)) == percentage:
        return f"{int(percentage)}%"
    return f"{percentage:.2f}%"


def calculate_band_taxes(
    amount: float, bands: Sequence[TaxBand]
) -> tuple[float, list[tuple[TaxBand, float]]]:
    """Walk ``bands`` in order and return the total tax with per-band amounts.

    Each band consumes up to its width of the remaining ``amount``. Bands whose
    tax comes to zero are left out of the returned list.
    """

    total = 0.0
    rows: list[tuple[TaxBand, float]] = []
    remaining = amount

    for band in bands:
        if remaining <= 0:
            break

        width = band.width if band.width is not None else remaining
        portion = min(remaining, width)
        tax = portion * band.rate
        total += tax
        remaining -= portion

        if tax > 0:
            rows.append((band, tax))

    return total, rows

