"""SEO: titles, descriptions, tags and thumbnails."""

from __future__ import annotations

from typing import Sequence

from channel_audit.analyzers.common import mean, share, recommend
from channel_audit.models import CategoryScore, Severity, VideoMetrics
from channel_audit.parsing import clamp_score
from channel_audit.weights import SEO, weighted_score


def analyze_seo(videos: Sequence[VideoMetrics]) -> CategoryScore:
    subscores = {
        "titles": mean(video.title_score for video in videos),
        "descriptions": mean(video.description_score for video in videos),
        "tags": mean(video.tags_score for video in videos),
        "thumbnails": mean(video.thumbnail_score for video in videos),
    }
    score = clamp_score(weighted_score(SEO, subscores))

    no_tags = sum(1 for video in videos if not video.tags)

    recommendations = []
    if subscores["tags"] < 50:
        recommendations.append(recommend(
            Severity.CRITICAL, SEO,
            "Tag Strategy: add 8-15 tags per video mixing broad terms with long-tail phrases",
            f"{no_tags} of {len(videos)} videos have no tags; tags feed search and suggested traffic",
            "5-10 minutes per video",
        ))
    if subscores["titles"] < 70:
        recommendations.append(recommend(
            Severity.HIGH, SEO,
            "Rewrite titles to 30-60 characters with a keyword, a number or a clear benefit",
            "Higher click-through from search results and suggestions",
            "5 minutes per video",
        ))
    if subscores["descriptions"] < 60:
        recommendations.append(recommend(
            Severity.HIGH, SEO,
            "Expand descriptions to 200+ characters with timestamps, links and a call to action",
            "More indexable text and clearer navigation for viewers",
            "10 minutes per video",
        ))
    if subscores["thumbnails"] < 80:
        recommendations.append(recommend(
            Severity.MEDIUM, SEO,
            "Upload custom high-resolution (1280x720) thumbnails for every video",
            "Sharper thumbnails on large screens and better click-through",
            "20-30 minutes per video",
        ))

    return CategoryScore(
        name=SEO,
        score=score,
        subscores=subscores,
        recommendations=tuple(recommendations),
        details={
            "averageTitleLength": mean(video.title_length for video in videos),
            "averageDescriptionLength": mean(video.description_length for video in videos),
            "averageTagCount": mean(video.tag_count for video in videos),
            "videosWithoutTags": no_tags,
            "videosWithoutDescription": sum(1 for video in videos if not video.description),
            "highResThumbnailPercent": share(videos, lambda video: video.has_high_res_thumbnail),
        },
    )
