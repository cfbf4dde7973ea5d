"""PAYE tax engine.

Turns per-period income and expense entries into an aggregate tax position.
Each period is annualised, run through the consolidated relief allowance,
pension deduction and progressive schedule (or a flat override rate), then
scaled back to its own share of the output period before the shares are
summed. The module is pure: configuration is read but nothing is stored.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from nairatax.backend.app.models import (
    PeriodContribution,
    PeriodInput,
    ResultTotals,
    TaxBandEntry,
    TaxResult,
    TransactionRecord,
)
from nairatax.backend.config.engine_config import (
    EngineConfiguration,
    load_engine_configuration,
)

from .utils import calculate_band_taxes

MONTHS_PER_YEAR = 12
DAYS_PER_MONTH = 30

FULL_YEAR_LABEL = "Annual (Full Year)"
MONTHLY_BREAKDOWN_LABEL = "Annual (Breakdown)"


def _override_applies(rate: float | None) -> bool:
    return rate is not None and math.isfinite(rate)


def calculate_period(
    period: PeriodInput,
    override_rate_percent: float | None = None,
    config: EngineConfiguration | None = None,
) -> PeriodContribution:
    """Return ``period``'s contribution to the aggregate result."""

    config = config or load_engine_configuration()

    period_gross = sum(source.amount for source in period.income_sources)
    period_deductible = sum(
        expense.amount for expense in period.expenses if expense.is_tax_deductible
    )
    period_personal = sum(
        expense.amount for expense in period.expenses if not expense.is_tax_deductible
    )

    multiplier = 1 if period.is_annual else MONTHS_PER_YEAR
    annual_gross = period_gross * multiplier
    annual_deductible = period_deductible * multiplier
    annual_personal = period_personal * multiplier

    annual_pension = annual_gross * config.pension.rate

    relief = config.relief
    annual_cra = (
        max(relief.fixed_amount, annual_gross * relief.gross_floor_rate)
        + annual_gross * relief.gross_rate
    )

    annual_taxable = annual_gross - annual_cra - annual_pension - annual_deductible
    if annual_taxable < 0:
        annual_taxable = 0.0

    # Override mode taxes gross income, not taxable income.
    annual_rows: list[tuple[str, float, float]]
    if _override_applies(override_rate_percent):
        rate = override_rate_percent / 100
        annual_tax = annual_gross * rate
        annual_rows = [(config.override.label, rate, annual_tax)]
    else:
        annual_tax, band_rows = calculate_band_taxes(annual_taxable, config.bands)
        annual_rows = [(band.label, band.rate, tax) for band, tax in band_rows]

    annual_net = annual_gross - annual_pension - annual_tax - annual_deductible
    annual_final = annual_net - annual_personal

    divisor = 1 if period.is_annual else MONTHS_PER_YEAR

    return PeriodContribution(
        gross=annual_gross / divisor,
        pension=annual_pension / divisor,
        cra=annual_cra / divisor,
        taxable=annual_taxable / divisor,
        tax=annual_tax / divisor,
        tax_deductible=annual_deductible / divisor,
        personal_expenses=annual_personal / divisor,
        net=annual_net / divisor,
        final=annual_final / divisor,
        annual_gross=annual_gross,
        annual_tax=annual_tax,
        annual_net=annual_net,
        annual_final=annual_final,
        is_annual=period.is_annual,
        breakdown=tuple(
            TaxBandEntry(band=label, rate=rate, amount=amount / divisor)
            for label, rate, amount in annual_rows
        ),
    )


def build_ledger(periods: Sequence[PeriodInput]) -> tuple[TransactionRecord, ...]:
    """Flatten every income and expense entry into ledger records."""

    records: list[TransactionRecord] = []
    for period in periods:
        for source in period.income_sources:
            records.append(
                TransactionRecord(
                    id=source.id,
                    period=period.label,
                    type="Income",
                    description=source.description,
                    amount=source.amount,
                    bank=source.bank,
                    date=source.date,
                    receipt_ref=source.receipt_ref,
                )
            )
        for expense in period.expenses:
            records.append(
                TransactionRecord(
                    id=expense.id,
                    period=period.label,
                    type="Expense",
                    description=expense.category,
                    amount=expense.amount,
                    bank=expense.bank,
                    date=expense.date,
                    receipt_ref=expense.receipt_ref,
                    is_tax_deductible=expense.is_tax_deductible,
                )
            )
    return tuple(records)


def describe_period(periods: Sequence[PeriodInput]) -> str:
    """Return the human-readable label for a set of periods."""

    if len(periods) == 1 and periods[0].is_annual:
        return FULL_YEAR_LABEL
    if len(periods) == MONTHS_PER_YEAR:
        return MONTHLY_BREAKDOWN_LABEL
    if len(periods) == 1:
        return periods[0].label
    return f"{len(periods)} Selected Months"


def compute(
    periods: Sequence[PeriodInput],
    override_rate_percent: float | None = None,
    *,
    config: EngineConfiguration | None = None,
) -> TaxResult:
    """Compute the aggregate tax result for ``periods``.

    ``periods`` is either a single annual period or one to twelve monthly
    periods; callers validate the composition beforehand. Monetary fields of
    the result are annual totals for the annual case and sums over the
    selected months otherwise.
    """

    if not periods:
        raise ValueError("At least one period is required")

    config = config or load_engine_configuration()

    totals = ResultTotals()
    for period in periods:
        totals.add(calculate_period(period, override_rate_percent, config))

    full_year = len(periods) == 1 and periods[0].is_annual
    duration_months = MONTHS_PER_YEAR if full_year else len(periods)

    effective_tax_rate = (totals.tax / totals.gross) * 100 if totals.gross > 0 else 0.0
    daily_net = totals.net / (duration_months * DAYS_PER_MONTH)

    return TaxResult(
        gross_income=totals.gross,
        consolidated_relief=totals.cra,
        pension=totals.pension,
        taxable_income=totals.taxable,
        paye_tax=totals.tax,
        net_income=totals.net,
        breakdown=totals.breakdown,
        period=describe_period(periods),
        duration_months=duration_months,
        selected_months=tuple(period.label for period in periods),
        effective_tax_rate=effective_tax_rate,
        daily_net=daily_net,
        total_tax_deductible=totals.tax_deductible,
        total_personal_expenses=totals.personal_expenses,
        final_balance=totals.final,
        transaction_history=build_ledger(periods),
    )


__all__ = [
    "DAYS_PER_MONTH",
    "FULL_YEAR_LABEL",
    "MONTHLY_BREAKDOWN_LABEL",
    "MONTHS_PER_YEAR",
    "build_ledger",
    "calculate_period",
    "compute",
    "describe_period",
]
