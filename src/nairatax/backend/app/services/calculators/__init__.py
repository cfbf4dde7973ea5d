"""Domain-specific calculation helpers."""

from .paye import build_ledger, calculate_period, compute, describe_period
from .utils import calculate_band_taxes, format_percentage

__all__ = [
    "build_ledger",
    "calculate_band_taxes",
    "calculate_period",
    "compute",
    "describe_period",
    "format_percentage",
]
