"""Pydantic models describing the PAYE engine configuration schema."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
    model_validator,
)
from typing_extensions import Self


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class TaxBand(ImmutableModel):
    """A single band of the progressive schedule.

    ``width`` is the amount of taxable income the band absorbs before the next
    band starts. The final band leaves it unset to absorb the remainder.
    """

    width: float | None = Field(default=None, alias="limit")
    rate: float
    label: str

    @model_validator(mode="after")
    def _validate_values(self) -> TaxBand:
        if self.rate < 0 or self.rate > 1:
            raise ConfigurationError("Band rates must be fractions between 0 and 1")
        if self.width is not None and self.width <= 0:
            raise ConfigurationError("Band widths must be positive values")
        if not self.label.strip():
            raise ConfigurationError("Bands require a non-empty label")
        return self


class ReliefConfig(ImmutableModel):
    """Consolidated relief allowance parameters."""

    fixed_amount: float = Field(default=200_000.0, ge=0)
    gross_floor_rate: float = Field(default=0.01, ge=0, le=1)
    gross_rate: float = Field(default=0.20, ge=0, le=1)


class PensionConfig(ImmutableModel):
    """Flat pension contribution applied to annual gross income."""

    rate: float = Field(default=0.08, ge=0, le=1)


class OverrideConfig(ImmutableModel):
    """Presentation details for flat or specialised rate calculations."""

    label: str = "Specialized Rate"


class SpecializedRate(ImmutableModel):
    """Named flat rate offered as an alternative to the progressive schedule."""

    label: str
    rate: float = Field(ge=0, le=100)
    category: str


class ExpenseCategory(ImmutableModel):
    """Well-known expense label and whether it reduces taxable income."""

    label: str
    tax_deductible: bool = False

    @field_validator("label")
    @classmethod
    def _strip_label(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ConfigurationError("Expense categories require a label")
        return stripped


class CurrencyConfig(ImmutableModel):
    """Display metadata for a supported currency."""

    code: str
    symbol: str
    locale: str
    name: str

    @field_validator("code")
    @classmethod
    def _normalise_code(cls, value: str) -> str:
        return value.strip().upper()


class HistoryConfig(ImmutableModel):
    """Limits applied to stored calculation history."""

    capacity: int = Field(default=10, gt=0)
    initial_calculation_count: int = Field(default=0, ge=0)


class EngineConfiguration(ImmutableModel):
    """Root configuration for the PAYE engine and its service layer."""

    meta: Mapping[str, Any] = Field(default_factory=dict)
    relief: ReliefConfig = Field(default_factory=ReliefConfig)
    pension: PensionConfig = Field(default_factory=PensionConfig)
    bands: Sequence[TaxBand]
    override: OverrideConfig = Field(default_factory=OverrideConfig)
    specialized_rates: Sequence[SpecializedRate] = Field(default_factory=tuple)
    expense_categories: Sequence[ExpenseCategory] = Field(default_factory=tuple)
    currencies: Sequence[CurrencyConfig] = Field(default_factory=tuple)
    history: HistoryConfig = Field(default_factory=HistoryConfig)

    @field_validator(
        "bands",
        "specialized_rates",
        "expense_categories",
        "currencies",
        mode="after",
    )
    @classmethod
    def _freeze_sequences(cls, value: Sequence[Any]) -> tuple[Any, ...]:
        return tuple(value)

    @model_validator(mode="after")
    def _validate_bands(self) -> Self:
        if not self.bands:
            raise ConfigurationError("At least one tax band must be configured")
        for band in self.bands[:-1]:
            if band.width is None:
                raise ConfigurationError(
                    "Only the final tax band may have an open width"
                )
        if self.bands[-1].width is not None:
            raise ConfigurationError("Final tax band must have an open width")
        return self

    @computed_field
    @property
    def default_currency(self) -> str:
        code = self.meta.get("currency") if isinstance(self.meta, Mapping) else None
        if isinstance(code, str) and code.strip():
            return code.strip().upper()
        return "NGN"

    def find_currency(self, code: str | None) -> CurrencyConfig | None:
        wanted = (code or self.default_currency).strip().upper()
        for currency in self.currencies:
            if currency.code == wanted:
                return currency
        return None

    def find_specialized_rate(self, label: str) -> SpecializedRate | None:
        wanted = label.strip().casefold()
        for entry in self.specialized_rates:
            if entry.label.casefold() == wanted:
                return entry
        return None


__all__ = [
    "ConfigurationError",
    "CurrencyConfig",
    "EngineConfiguration",
    "ExpenseCategory",
    "HistoryConfig",
    "ImmutableModel",
    "OverrideConfig",
    "PensionConfig",
    "ReliefConfig",
    "SpecializedRate",
    "TaxBand",
    "ValidationError",
]
