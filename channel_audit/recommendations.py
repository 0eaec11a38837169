"""Merge category recommendations into one prioritized list."""

from __future__ import annotations

from typing import Iterable, Mapping, Tuple

from channel_audit.models import CategoryScore, Recommendation, Severity
from channel_audit.weights import CATEGORY_ORDER

DEFAULT_CAP = 10

MAINTAIN = Recommendation(
    priority=Severity.LOW,
    category="Overall",
    action="Maintain current performance",
    impact="No significant gaps detected in the analyzed videos",
    time_investment="Ongoing",
)


def ordered_categories(categories: Mapping[str, CategoryScore]) -> Iterable[CategoryScore]:
    for name in CATEGORY_ORDER:
        if name in categories:
            yield categories[name]
    for name, category in categories.items():
        if name not in CATEGORY_ORDER:
            yield category


def aggregate_recommendations(
    categories: Mapping[str, CategoryScore],
    cap: int = DEFAULT_CAP,
) -> Tuple[Recommendation, ...]:
    """
    Concatenate in category order, collapse repeated (category, action) pairs
    to their highest-priority copy at the first position, stable-sort by
    priority (Critical first) and truncate to ``cap``.

    Never returns an empty tuple.
    """
    positions = {}
    merged = []
    for category in ordered_categories(categories):
        for rec in category.recommendations:
            key = (rec.category, rec.action)
            if key not in positions:
                positions[key] = len(merged)
                merged.append(rec)
            elif rec.priority.rank > merged[positions[key]].priority.rank:
                merged[positions[key]] = rec

    merged.sort(key=lambda rec: rec.priority.rank, reverse=True)
    merged = merged[:max(cap, 1)]
    return tuple(merged) if merged else (MAINTAIN,)
