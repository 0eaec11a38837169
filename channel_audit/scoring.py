"""Overall score, grade bands and coverage."""

from __future__ import annotations

from typing import Mapping

from channel_audit.analyzers.common import mean
from channel_audit.models import CategoryScore, ChannelRecord, Coverage
from channel_audit.parsing import clamp_score
from channel_audit.weights import GRADE_BANDS, LOWEST_GRADE, TRANSCRIPT


def grade_for(score: float) -> str:
    for threshold, grade in GRADE_BANDS:
        if score >= threshold:
            return grade
    return LOWEST_GRADE


def overall_score(categories: Mapping[str, CategoryScore], transcripts_analyzed: int = 0) -> float:
    """Unweighted mean of category scores; Transcript counts only when transcripts were analyzed."""
    scores = [
        category.score
        for name, category in categories.items()
        if name != TRANSCRIPT or transcripts_analyzed > 0
    ]
    return clamp_score(mean(scores))


def compute_coverage(
    channel: ChannelRecord,
    videos_analyzed: int,
    min_reliable_videos: int = 10,
    transcripts_analyzed: int = 0,
) -> Coverage:
    if videos_analyzed <= 0:
        ratio = 0.0
    elif channel.video_count <= 0:
        ratio = 1.0
    else:
        ratio = min(max(videos_analyzed / channel.video_count, 0.0), 1.0)

    return Coverage(
        videos_analyzed=videos_analyzed,
        channel_video_count=channel.video_count,
        ratio=ratio,
        confidence="High" if videos_analyzed >= min_reliable_videos else "Low",
        transcripts_analyzed=transcripts_analyzed,
    )
