"""Content strategy: upload cadence, theme focus, format mix and audience."""

from __future__ import annotations

from collections import Counter
from typing import Dict, Sequence

from channel_audit import classifiers
from channel_audit.analyzers.common import mean, population_std, recommend
from channel_audit.models import CategoryScore, Severity, VideoMetrics
from channel_audit.parsing import clamp_score
from channel_audit.weights import CONTENT_STRATEGY, weighted_score

DEFAULT_GAP_DAYS = 7.0

FORMAT_BUCKETS = (
    ("shorts", 60),
    ("medium", 600),
    ("long", 3600),
    ("streams", None),
)


def frequency_label(avg_gap_days: float) -> str:
    if avg_gap_days <= 2:
        return "Daily"
    if avg_gap_days <= 4:
        return "Every 2-3 days"
    if avg_gap_days <= 8:
        return "Weekly"
    if avg_gap_days <= 15:
        return "Bi-weekly"
    return "Irregular"


def analyze_upload_pattern(videos: Sequence[VideoMetrics]) -> Dict:
    """
    Gaps between consecutive uploads (newest first).

    consistencyScore = max(0, 100 - 3 x population std dev of gaps)
    """
    dated = sorted(
        (video for video in videos if video.published_at is not None),
        key=lambda video: video.published_at,
        reverse=True,
    )
    gaps = [
        (dated[i].published_at - dated[i + 1].published_at).total_seconds() / 86400
        for i in range(len(dated) - 1)
    ]

    avg_gap = mean(gaps, default=DEFAULT_GAP_DAYS)
    std_dev = population_std(gaps)
    consistency = max(0.0, 100 - 3 * std_dev)

    longest_gap = max(gaps) if gaps else 0.0
    longest_gap_after = ""
    if gaps:
        index = gaps.index(longest_gap)
        longest_gap_after = dated[index + 1].title

    return {
        "consistencyScore": clamp_score(consistency),
        "averageDaysBetween": avg_gap,
        "stdDevDays": std_dev,
        "frequency": frequency_label(avg_gap),
        "longestGapDays": longest_gap,
        "longestGapAfter": longest_gap_after,
        "datedVideos": len(dated),
    }


def analyze_themes(videos: Sequence[VideoMetrics]) -> Dict:
    frequency = Counter()
    if any(video.tags for video in videos):
        source = "tags"
        for video in videos:
            frequency.update(tag.strip().lower() for tag in video.tags if tag.strip())
    else:
        source = "titles"
        for video in videos:
            frequency.update(classifiers.keyword_tokens(video.title, min_length=4))

    total = sum(frequency.values())
    top_themes = [
        {"theme": theme, "frequency": count}
        for theme, count in frequency.most_common()
        if count >= 2
    ][:5]

    if len(top_themes) >= 3:
        clarity = 85.0
    elif top_themes:
        clarity = 60.0
    else:
        clarity = 30.0

    top_frequency = frequency.most_common(1)[0][1] if frequency else 0
    return {
        "clarityScore": clarity,
        "primaryThemes": top_themes,
        "themeConsistency": (top_frequency / total * 100) if total else 0.0,
        "themeSource": source,
        "focusRecommendation": "Good thematic focus" if top_themes else "Consider more consistent topic focus",
    }


def analyze_format_diversity(videos: Sequence[VideoMetrics]) -> Dict:
    buckets = {name: 0 for name, _ in FORMAT_BUCKETS}
    for video in videos:
        for name, limit in FORMAT_BUCKETS:
            if limit is None or video.duration_seconds < limit:
                buckets[name] += 1
                break

    non_empty = sum(1 for count in buckets.values() if count > 0)
    return {
        "diversityScore": float(min(25 * non_empty, 100)),
        "distribution": buckets,
        "formatsUsed": non_empty,
    }


def analyze_audience(videos: Sequence[VideoMetrics]) -> Dict:
    corpus = " ".join(f"{video.title} {video.description}" for video in videos)
    counts = classifiers.audience_match_counts(corpus)

    score = 40 + 15 * sum(1 for count in counts.values() if count > 3)
    # Highest count above 5 wins; ties keep keyword-set order
    primary, best = "Mixed", 5
    for name, count in counts.items():
        if count > best:
            primary, best = name, count
    return {
        "clarityScore": clamp_score(score),
        "primaryAudience": primary,
        "matchCounts": counts,
    }


def analyze_content_strategy(videos: Sequence[VideoMetrics]) -> CategoryScore:
    upload = analyze_upload_pattern(videos)
    themes = analyze_themes(videos)
    formats = analyze_format_diversity(videos)
    audience = analyze_audience(videos)

    subscores = {
        "uploadConsistency": upload["consistencyScore"],
        "themeClarity": themes["clarityScore"],
        "formatDiversity": formats["diversityScore"],
        "audienceClarity": audience["clarityScore"],
    }
    score = clamp_score(weighted_score(CONTENT_STRATEGY, subscores))

    recommendations = []
    if upload["consistencyScore"] < 50:
        recommendations.append(recommend(
            Severity.HIGH, CONTENT_STRATEGY,
            f"Publish on a fixed schedule (currently every {upload['averageDaysBetween']:.0f} days with high variation)",
            "Predictable uploads build viewing habits with returning subscribers",
            "1 hour planning + batching",
        ))
    if upload["averageDaysBetween"] > 15:
        recommendations.append(recommend(
            Severity.HIGH, CONTENT_STRATEGY,
            "Increase upload frequency to at least one video every 1-2 weeks",
            "More entry points for search and suggested traffic",
            "Ongoing",
        ))
    if themes["clarityScore"] <= 30:
        recommendations.append(recommend(
            Severity.MEDIUM, CONTENT_STRATEGY,
            "Focus on 3-5 core topics and repeat their keywords in titles and tags",
            "Clearer topical signals for recommendations",
            "2 hours planning",
        ))
    if formats["formatsUsed"] <= 1 and videos:
        recommendations.append(recommend(
            Severity.LOW, CONTENT_STRATEGY,
            "Test a second format (Shorts for reach or long-form for watch time)",
            "Reaches viewers on more surfaces",
            "Per video",
        ))
    if audience["primaryAudience"] == "Mixed" and audience["clarityScore"] <= 40:
        recommendations.append(recommend(
            Severity.LOW, CONTENT_STRATEGY,
            "State the intended skill level (beginner, advanced, professional) in titles and descriptions",
            "Viewers can tell at a glance whether a video is for them",
            "5 minutes per video",
        ))

    return CategoryScore(
        name=CONTENT_STRATEGY,
        score=score,
        subscores={**subscores, "themeConsistency": themes["themeConsistency"]},
        recommendations=tuple(recommendations),
        details={
            "uploadPattern": upload,
            "contentThemes": themes,
            "formatDiversity": formats,
            "audience": audience,
        },
    )
