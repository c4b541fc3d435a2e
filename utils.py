"""
utils.py
Validation, sample data, pandas summaries.
"""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from manager import MemberManager
from models import (
    RATING_MAX,
    RATING_MIN,
    Academic,
    Coached,
    MemberRecord,
    Standard,
    VariantKind,
    rating_in_range,
)
from performance import PerformanceMonitor

MEMBER_COLUMNS = [
    "id", "full_name", "kind", "email", "phone", "rating", "goal_achieved", "monthly_fee",
]

# Rating bands used by the fee impact analysis
HIGH_PERFORMER_MIN = 8
LOW_PERFORMER_MAX = 4


def validate_member_inputs(
    member_id: str, first_name: str, last_name: str, email: str, phone: str, rating=None
) -> list[str]:
    errors: list[str] = []
    if not member_id.strip():
        errors.append("Member ID is required.")
    if not first_name.strip() or not last_name.strip():
        errors.append("First and last name are required.")
    if "@" not in email or "." not in email:
        errors.append("Please enter a valid email address.")
    if not phone.strip():
        errors.append("Phone is required.")
    if rating is not None and not rating_in_range(rating):
        errors.append(f"Rating must be a whole number from {RATING_MIN} to {RATING_MAX}.")
    return errors


def insert_sample_data(manager: MemberManager) -> list[MemberRecord]:
    """
    Add one member of each variant. Ids that already exist are skipped,
    so this is safe to run more than once.
    """
    samples = [
        MemberRecord("M001", "John", "Doe", "john.doe@email.com", "555-0101",
                     Standard(), rating=8, goal_achieved=True),
        MemberRecord("M002", "Jane", "Smith", "jane.smith@email.com", "555-0102",
                     Coached("Alex Trainer", 8), rating=9, goal_achieved=True),
        MemberRecord("M003", "Bob", "Johnson", "bob.johnson@email.com", "555-0103",
                     Academic("STU2024001", "State University"), rating=6),
    ]
    added = []
    for record in samples:
        if manager.add(record) is None:
            added.append(record)
    return added


def members_frame(manager: MemberManager, members: Iterable[MemberRecord] | None = None) -> pd.DataFrame:
    records = manager.all() if members is None else list(members)
    rows = [
        {
            "id": m.id,
            "full_name": m.full_name(),
            "kind": m.kind.value,
            "email": m.email,
            "phone": m.phone,
            "rating": m.rating,
            "goal_achieved": m.goal_achieved,
            "monthly_fee": manager.monthly_fee(m),
        }
        for m in records
    ]
    return pd.DataFrame(rows, columns=MEMBER_COLUMNS)


def type_comparison(manager: MemberManager) -> pd.DataFrame:
    """Count, average rating, goal rate (%) and average fee per variant, plus OVERALL."""
    columns = ["kind", "count", "avg_rating", "goal_rate", "avg_fee"]
    df = members_frame(manager)
    if df.empty:
        return pd.DataFrame(columns=columns)

    def summarise(label: str, part: pd.DataFrame) -> dict:
        return {
            "kind": label,
            "count": len(part),
            "avg_rating": float(part["rating"].mean()),
            "goal_rate": float(part["goal_achieved"].astype(bool).mean() * 100),
            "avg_fee": float(part["monthly_fee"].mean()),
        }

    rows = []
    for kind in VariantKind:
        part = df[df["kind"] == kind.value]
        if not part.empty:
            rows.append(summarise(kind.value, part))
    rows.append(summarise("OVERALL", df))
    return pd.DataFrame(rows, columns=columns)


def fee_impact(manager: MemberManager) -> dict[str, float | None]:
    """
    Average fees by performance band and goal status, and revenue vs. the
    undiscounted base fee. Averages over an empty group are None.
    """
    df = members_frame(manager)

    def mean_fee(mask) -> float | None:
        part = df.loc[mask, "monthly_fee"]
        return None if part.empty else round(float(part.mean()), 2)

    if df.empty:
        return {
            "high_performer_avg_fee": None,
            "low_performer_avg_fee": None,
            "goal_achiever_avg_fee": None,
            "non_achiever_avg_fee": None,
            "potential_revenue": 0.0,
            "actual_revenue": 0.0,
            "total_discounts": 0.0,
            "discount_rate": 0.0,
        }

    achieved = df["goal_achieved"].astype(bool)
    potential = manager.rates.base_fee * len(df)
    actual = float(df["monthly_fee"].sum())
    discount = potential - actual
    return {
        "high_performer_avg_fee": mean_fee(df["rating"] >= HIGH_PERFORMER_MIN),
        "low_performer_avg_fee": mean_fee(df["rating"] <= LOW_PERFORMER_MAX),
        "goal_achiever_avg_fee": mean_fee(achieved),
        "non_achiever_avg_fee": mean_fee(~achieved),
        "potential_revenue": round(potential, 2),
        "actual_revenue": round(actual, 2),
        "total_discounts": round(discount, 2),
        "discount_rate": round(discount / potential * 100, 1) if potential else 0.0,
    }


def performance_frame(monitor: PerformanceMonitor) -> pd.DataFrame:
    rows = [
        {"operation": name, "total_ns": total, "total_ms": total / 1_000_000}
        for name, total in monitor.report()
    ]
    return pd.DataFrame(rows, columns=["operation", "total_ns", "total_ms"])


def fee_range(manager: MemberManager) -> dict[str, float] | None:
    """Minimum, maximum, average, median and spread of monthly fees; None when empty."""
    fees = members_frame(manager)["monthly_fee"]
    if fees.empty:
        return None
    return {
        "minimum": round(float(fees.min()), 2),
        "maximum": round(float(fees.max()), 2),
        "average": round(float(fees.mean()), 2),
        "median": round(float(fees.median()), 2),
        "range": round(float(fees.max() - fees.min()), 2),
    }


def revenue_projections(manager: MemberManager) -> dict[str, float]:
    fees = members_frame(manager)["monthly_fee"]
    monthly = float(fees.sum()) if not fees.empty else 0.0
    return {
        "monthly": round(monthly, 2),
        "quarterly": round(monthly * 3, 2),
        "annual": round(monthly * 12, 2),
        "average_per_member": round(monthly / len(fees), 2) if len(fees) else 0.0,
    }
