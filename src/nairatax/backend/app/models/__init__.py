"""Typed request/response models shared across the calculation services.

Inputs and results are frozen Pydantic models so that a request can be handed
to the engine, serialised into history, and read back without drift. Derived
per-period figures use lightweight dataclasses because they never leave the
engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .api import (
    MAX_PERIODS,
    CalculationRequest,
    CalculationResponse,
    Expense,
    IncomeSource,
    PeriodInput,
    ReminderInput,
    ResponseMeta,
    SavedCalculation,
    TaxBandEntry,
    TaxReminder,
    TaxResult,
    TransactionRecord,
    format_validation_error,
    validate_period_composition,
)

__all__ = [
    "MAX_PERIODS",
    "CalculationRequest",
    "CalculationResponse",
    "Expense",
    "IncomeSource",
    "PeriodContribution",
    "PeriodInput",
    "ReminderInput",
    "ResponseMeta",
    "ResultTotals",
    "SavedCalculation",
    "TaxBandEntry",
    "TaxReminder",
    "TaxResult",
    "TransactionRecord",
    "format_validation_error",
    "validate_period_composition",
]


@dataclass(frozen=True)
class PeriodContribution:
    """One period's share of the aggregate, already in output-period terms.

    Monthly periods contribute a twelfth of their annualised figures, the
    single full-year period contributes its annual figures unchanged. The
    ``annual_*`` mirrors always hold the annualised values.
    """

    gross: float
    pension: float
    cra: float
    taxable: float
    tax: float
    tax_deductible: float
    personal_expenses: float
    net: float
    final: float
    annual_gross: float
    annual_tax: float
    annual_net: float
    annual_final: float
    is_annual: bool
    breakdown: tuple[TaxBandEntry, ...] = ()


@dataclass
class ResultTotals:
    """Running sums of the scalar fields across period contributions."""

    gross: float = 0.0
    pension: float = 0.0
    cra: float = 0.0
    taxable: float = 0.0
    tax: float = 0.0
    tax_deductible: float = 0.0
    personal_expenses: float = 0.0
    net: float = 0.0
    final: float = 0.0
    band_amounts: dict[str, TaxBandEntry] = field(default_factory=dict)

    def add(self, contribution: PeriodContribution) -> None:
        self.gross += contribution.gross
        self.pension += contribution.pension
        self.cra += contribution.cra
        self.taxable += contribution.taxable
        self.tax += contribution.tax
        self.tax_deductible += contribution.tax_deductible
        self.personal_expenses += contribution.personal_expenses
        self.net += contribution.net
        self.final += contribution.final

        for entry in contribution.breakdown:
            existing = self.band_amounts.get(entry.band)
            if existing is None:
                self.band_amounts[entry.band] = entry
            else:
                self.band_amounts[entry.band] = existing.model_copy(
                    update={"amount": existing.amount + entry.amount}
                )

    @property
    def breakdown(self) -> tuple[TaxBandEntry, ...]:
        return tuple(self.band_amounts.values())
