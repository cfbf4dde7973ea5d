#!/usr/bin/env python3
"""Collect baseline timing metrics for the NairaTax calculation service."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from time import perf_counter

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from nairatax.backend.app.services.calculation_service import calculate_tax  # noqa: E402

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def _monthly_period(month: str) -> dict[str, object]:
    return {
        "label": month,
        "income_sources": [
            {"description": "Salary", "amount": 650_000},
            {"description": "Freelance", "amount": 120_000},
        ],
        "expenses": [
            {"category": "National Housing Fund (NHF)", "amount": 16_250},
            {"category": "Rent", "amount": 150_000},
            {"category": "Transport", "amount": 40_000},
        ],
    }


SAMPLES: dict[str, dict[str, object]] = {
    "single_month": {"periods": [_monthly_period("January")]},
    "twelve_months": {"periods": [_monthly_period(month) for month in MONTHS]},
    "full_year": {
        "periods": [
            {
                "label": "Full Year",
                "is_annual": True,
                "income_sources": [{"description": "Salary", "amount": 9_240_000}],
                "expenses": [{"category": "Life Assurance Premium", "amount": 120_000}],
            }
        ]
    },
}


def measure(payload: dict[str, object], iterations: int) -> dict[str, float]:
    """Return timing statistics for repeated calculations of ``payload``."""

    calculate_tax(payload)  # Warm configuration cache
    start = perf_counter()
    for _ in range(iterations):
        calculate_tax(payload)
    elapsed = perf_counter() - start
    return {
        "iterations": iterations,
        "total_ms": elapsed * 1000,
        "average_ms": (elapsed / iterations) * 1000,
    }


def main() -> None:
    iterations = int(os.getenv("NAIRATAX_PROFILE_ITERATIONS", "200"))
    report = {name: measure(payload, iterations) for name, payload in SAMPLES.items()}
    print(json.dumps(report, indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
