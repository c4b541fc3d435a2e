"""
fees.py
Base-rate configuration and the default monthly fee policy.
"""

from __future__ import annotations

from dataclasses import dataclass

from models import Academic, Coached, Variant


@dataclass(frozen=True)
class RateConfig:
    base_fee: float = 50.0
    coached_session_rate: float = 15.0  # per session per month
    academic_discount: float = 0.20  # fraction off the base fee


DEFAULT_RATES = RateConfig()


def monthly_fee_for(variant: Variant, rates: RateConfig = DEFAULT_RATES) -> float:
    """
    Default fee policy: base fee, plus a per-session surcharge for coached
    members, minus the academic discount. Rounded to cents.
    """
    fee = rates.base_fee
    if isinstance(variant, Coached):
        fee += rates.coached_session_rate * max(0, variant.sessions_per_month)
    elif isinstance(variant, Academic):
        fee *= 1.0 - rates.academic_discount
    return round(fee, 2)
