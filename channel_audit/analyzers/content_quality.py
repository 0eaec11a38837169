"""Content quality: title hooks, description structure, CTAs and polish."""

from __future__ import annotations

from typing import Sequence

from channel_audit import classifiers
from channel_audit.analyzers.common import mean, recommend, share
from channel_audit.models import CategoryScore, Severity, VideoMetrics
from channel_audit.parsing import clamp_score
from channel_audit.weights import CONTENT_QUALITY, weighted_score

STRONG_HOOK = 60
WEAK_HOOK = 30


def analyze_content_quality(videos: Sequence[VideoMetrics]) -> CategoryScore:
    strengths = [classifiers.hook_strength(video.title) for video in videos]

    timestamps_pct = share(videos, lambda video: video.flags.has_timestamps)
    multiline_pct = share(videos, lambda video: "\n" in video.description)
    cta_pct = share(videos, lambda video: video.flags.has_call_to_action)
    links_pct = share(videos, lambda video: video.flags.has_links)
    good_title_pct = share(videos, lambda video: 30 <= video.title_length <= 60)
    avg_thumbnail = mean(video.thumbnail_score for video in videos)

    subscores = {
        "hooks": clamp_score(mean(strengths)),
        "structure": clamp_score(0.7 * timestamps_pct + 0.3 * multiline_pct),
        "callsToAction": clamp_score(cta_pct),
        "professionalQuality": clamp_score(0.5 * avg_thumbnail + 0.25 * links_pct + 0.25 * good_title_pct),
    }
    score = clamp_score(weighted_score(CONTENT_QUALITY, subscores))

    recommendations = []
    if subscores["hooks"] < 40:
        recommendations.append(recommend(
            Severity.HIGH, CONTENT_QUALITY,
            "Open titles with curiosity: a question, a number or a bold claim",
            "Stronger hooks lift click-through and early retention",
            "5 minutes per video",
        ))
    if timestamps_pct < 50:
        recommendations.append(recommend(
            Severity.MEDIUM, CONTENT_QUALITY,
            "Add chapter timestamps (0:00 Intro, ...) to every video over 5 minutes",
            "Chapters appear in search and help viewers find what they came for",
            "5 minutes per video",
        ))
    if cta_pct < 50:
        recommendations.append(recommend(
            Severity.MEDIUM, CONTENT_QUALITY,
            "Add a clear call to action (subscribe, comment, next video) to every description",
            "Turns viewers into subscribers and returning viewers",
            "2 minutes per video",
        ))
    if subscores["professionalQuality"] < 50:
        recommendations.append(recommend(
            Severity.LOW, CONTENT_QUALITY,
            "Standardize a description template with links, resources and a consistent thumbnail style",
            "More polished and recognizable uploads",
            "1 hour once",
        ))

    return CategoryScore(
        name=CONTENT_QUALITY,
        score=score,
        subscores=subscores,
        recommendations=tuple(recommendations),
        details={
            "strongHooks": sum(1 for strength in strengths if strength > STRONG_HOOK),
            "weakHooks": sum(1 for strength in strengths if strength < WEAK_HOOK),
            "timestampsPercent": timestamps_pct,
            "multiLineDescriptionPercent": multiline_pct,
            "callToActionPercent": cta_pct,
            "linksPercent": links_pct,
            "optimalTitleLengthPercent": good_title_pct,
            "hookInDescriptionPercent": share(videos, lambda video: video.flags.has_hook),
        },
    )
