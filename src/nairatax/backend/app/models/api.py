"""Pydantic models describing the public API surface."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any, Literal
from uuid import uuid4

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from nairatax.backend.app.localization import LocalizedError, Translator, get_translator
from nairatax.backend.app.services.categories import resolve_deductibility

__all__ = [
    "IncomeSource",
    "Expense",
    "PeriodInput",
    "CalculationRequest",
    "TaxBandEntry",
    "TransactionRecord",
    "TaxResult",
    "ResponseMeta",
    "CalculationResponse",
    "SavedCalculation",
    "ReminderInput",
    "TaxReminder",
    "MAX_PERIODS",
    "format_validation_error",
    "validate_period_composition",
]


MAX_PERIODS = 12


def _new_id() -> str:
    return uuid4().hex


class _EntryMetadata(BaseModel):
    """Optional bookkeeping details carried from the input form to the ledger."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    bank: str | None = None
    date: str | None = None
    receipt_ref: str | None = Field(
        default=None, validation_alias=AliasChoices("receipt_ref", "receiptRef")
    )


class IncomeSource(_EntryMetadata):
    """One income line for a period, denominated in the period's own terms."""

    id: str = Field(default_factory=_new_id)
    description: str = "Income"
    amount: float = Field(ge=0, allow_inf_nan=False)


class Expense(_EntryMetadata):
    """One expense line for a period."""

    id: str = Field(default_factory=_new_id)
    category: str = "Expense"
    amount: float = Field(ge=0, allow_inf_nan=False)
    is_tax_deductible: bool = Field(
        validation_alias=AliasChoices("is_tax_deductible", "isTaxDeductible"),
    )

    @model_validator(mode="before")
    @classmethod
    def _resolve_deductibility(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data

        flag = data.get("is_tax_deductible", data.get("isTaxDeductible"))
        if flag is not None:
            return data

        prepared = {
            key: value
            for key, value in data.items()
            if key not in {"is_tax_deductible", "isTaxDeductible"}
        }
        category = prepared.get("category")
        prepared["is_tax_deductible"] = resolve_deductibility(
            category if isinstance(category, str) else "", fallback=False
        )
        return prepared


class PeriodInput(BaseModel):
    """A named calculation period with its income and expense entries."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    label: str = Field(validation_alias=AliasChoices("label", "month"))
    income_sources: tuple[IncomeSource, ...] = Field(
        default=(),
        validation_alias=AliasChoices("income_sources", "incomeSources"),
    )
    expenses: tuple[Expense, ...] = ()
    is_annual: bool = Field(
        default=False, validation_alias=AliasChoices("is_annual", "isAnnual")
    )

    @field_validator("label")
    @classmethod
    def _strip_label(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise LocalizedError("validation.period_label_required")
        return stripped

    @field_validator("is_annual", mode="before")
    @classmethod
    def _coerce_annual_flag(cls, value: Any) -> Any:
        # Null means monthly; other values go through pydantic's bool parsing.
        return False if value is None else value


def validate_period_composition(periods: Sequence[PeriodInput]) -> None:
    """Reject period lists the tax engine is not defined for.

    A request is either exactly one annual period or between one and twelve
    distinct monthly periods, and every period must report some earnings: an
    income source with a positive amount.
    """

    if not periods:
        raise LocalizedError("validation.periods_required")

    annual_count = sum(1 for period in periods if period.is_annual)
    if annual_count and len(periods) > 1:
        raise LocalizedError("validation.annual_period_alone")

    if len(periods) > MAX_PERIODS:
        raise LocalizedError("validation.too_many_periods", limit=MAX_PERIODS)

    seen: set[str] = set()
    for period in periods:
        key = period.label.casefold()
        if key in seen:
            raise LocalizedError("validation.duplicate_period", label=period.label)
        seen.add(key)

    for period in periods:
        if not any(source.amount > 0 for source in period.income_sources):
            if period.is_annual:
                raise LocalizedError("validation.annual_earnings_required")
            raise LocalizedError("validation.period_earnings_required", label=period.label)


class CalculationRequest(BaseModel):
    """Payload accepted by the calculation endpoint."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    periods: list[PeriodInput]
    override_rate: float | None = Field(
        default=None,
        validation_alias=AliasChoices("override_rate", "customTaxRate"),
    )
    special_rate: str | None = None
    currency: str | None = None
    locale: str | None = None
    save: bool = False

    @field_validator("override_rate")
    @classmethod
    def _validate_override_rate(cls, value: float | None) -> float | None:
        if value is None:
            return None
        if not math.isfinite(value):
            raise LocalizedError("validation.override_rate_not_finite")
        if value < 0 or value > 100:
            raise LocalizedError("validation.override_rate_range")
        return value

    @field_validator("special_rate", "currency", "locale", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _validate_composition(self) -> "CalculationRequest":
        validate_period_composition(self.periods)
        if self.override_rate is not None and self.special_rate is not None:
            raise LocalizedError("validation.override_rate_conflict")
        return self


class TaxBandEntry(BaseModel):
    """Tax attributed to one band of the schedule."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    band: str
    rate: float
    amount: float


class TransactionRecord(BaseModel):
    """Ledger line derived from a submitted income or expense entry."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    period: str
    type: Literal["Income", "Expense"]
    description: str
    amount: float
    bank: str | None = None
    date: str | None = None
    receipt_ref: str | None = None
    is_tax_deductible: bool | None = None


class TaxResult(BaseModel):
    """Aggregated tax position for the submitted periods."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_income: float
    consolidated_relief: float
    pension: float
    taxable_income: float
    paye_tax: float
    net_income: float
    breakdown: tuple[TaxBandEntry, ...]
    period: str
    duration_months: int
    selected_months: tuple[str, ...]
    effective_tax_rate: float
    daily_net: float
    total_tax_deductible: float
    total_personal_expenses: float
    final_balance: float
    transaction_history: tuple[TransactionRecord, ...]


class ResponseMeta(BaseModel):
    """Metadata returned alongside the calculation output."""

    model_config = ConfigDict(extra="forbid")

    locale: str
    currency: str
    mode: Literal["progressive", "override"]
    override_rate: float | None = None
    special_rate: str | None = None
    salary_tier: str
    saved_id: str | None = None


class CalculationResponse(BaseModel):
    """Full response payload produced by the calculation service."""

    model_config = ConfigDict(extra="forbid")

    result: TaxResult
    display: dict[str, str]
    labels: dict[str, str]
    meta: ResponseMeta


class SavedCalculation(BaseModel):
    """Calculation result stored verbatim in the history list."""

    model_config = ConfigDict(extra="forbid")

    id: str
    timestamp: str
    result: dict[str, Any]


class ReminderInput(BaseModel):
    """Fields accepted when scheduling a tax payment reminder."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    user_id: str = Field(
        min_length=1, validation_alias=AliasChoices("user_id", "userId")
    )
    tax_type: str = Field(
        min_length=1, validation_alias=AliasChoices("tax_type", "taxType")
    )
    due_date: str = Field(
        min_length=1, validation_alias=AliasChoices("due_date", "dueDate")
    )
    amount: float | None = Field(default=None, ge=0)
    notes: str | None = None
    is_completed: bool = Field(
        default=False, validation_alias=AliasChoices("is_completed", "isCompleted")
    )


class TaxReminder(ReminderInput):
    """A stored reminder."""

    id: str
    created_at: str


def format_validation_error(
    error: ValidationError,
    *,
    subject: str = "calculation",
    translator: Translator | None = None,
) -> str:
    """Return a concise description of validation issues in ``translator``'s locale.

    Issues raised as :class:`LocalizedError` inside validators are rendered
    again from the catalogue; pydantic's own messages pass through in English.
    """

    translator = translator or get_translator()

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        cause = (issue.get("ctx") or {}).get("error")
        if isinstance(cause, LocalizedError):
            message = cause.render(translator)
        elif issue.get("type") == "greater_than_equal" and issue.get("ctx", {}).get("ge") == 0:
            message = translator("validation.negative_value")
        else:
            message = issue.get("msg", "Invalid value")
            message = message.removeprefix("Value error, ")
        messages.append(f"{location}: {message}" if location else message)

    return translator.format(
        "validation.invalid_payload",
        subject=translator(f"validation.subject.{subject}"),
        details="; ".join(messages) if messages else str(error),
    )
