"""Small numeric helpers shared by the category analyzers."""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from channel_audit.models import Recommendation, Severity


def mean(values: Iterable[float], default: float = 0.0) -> float:
    values = list(values)
    return float(np.mean(values)) if values else default


def population_std(values: Iterable[float]) -> float:
    values = list(values)
    return float(np.std(values)) if len(values) > 1 else 0.0


def percent(count: int, total: int) -> float:
    return (count / total * 100) if total > 0 else 0.0


def share(items: Sequence, predicate) -> float:
    """Percentage of items satisfying predicate (0 for an empty sequence)."""
    return percent(sum(1 for item in items if predicate(item)), len(items))


def recommend(priority: Severity, category: str, action: str, impact: str, time_investment: str) -> Recommendation:
    return Recommendation(
        priority=priority,
        category=category,
        action=action,
        impact=impact,
        time_investment=time_investment,
    )
