"""Engagement: reach relative to subscribers, like and comment ratios, stability."""

from __future__ import annotations

from typing import Sequence

from channel_audit.analyzers.common import mean, population_std, recommend
from channel_audit.models import CategoryScore, ChannelRecord, Severity, VideoMetrics
from channel_audit.parsing import clamp_score
from channel_audit.weights import ENGAGEMENT, weighted_score


def views_to_subscribers_ratio(avg_views: float, subscribers: int) -> float:
    """Average views as a percentage of subscribers (0 without subscribers)."""
    if subscribers <= 0:
        return 0.0
    return avg_views / subscribers * 100


def benchmark(value: float, excellent: float, good: float) -> str:
    if value > excellent:
        return "Excellent"
    if value > good:
        return "Good"
    return "Needs Improvement"


def analyze_engagement(channel: ChannelRecord, videos: Sequence[VideoMetrics]) -> CategoryScore:
    avg_views = mean(video.views for video in videos)
    avg_like_ratio = mean(video.like_to_view_ratio for video in videos)
    avg_comment_ratio = mean(video.comment_to_view_ratio for video in videos)
    rates = [video.engagement_rate for video in videos]
    avg_engagement = mean(rates)
    engagement_std = population_std(rates)

    ratio = views_to_subscribers_ratio(avg_views, channel.subscriber_count)

    subscores = {
        "viewsToSubscribers": clamp_score(min(ratio * 10, 100)),
        "likeRatio": clamp_score(min(avg_like_ratio * 25, 100)),
        "commentQuality": clamp_score(min(avg_comment_ratio * 50, 100)),
        "engagementConsistency": clamp_score(max(0.0, 100 - 10 * engagement_std)),
    }
    score = clamp_score(weighted_score(ENGAGEMENT, subscores))

    recommendations = []
    if avg_comment_ratio <= 0.5:
        recommendations.append(recommend(
            Severity.HIGH, ENGAGEMENT,
            "End each video with a specific question and pin a comment that invites answers",
            "Comments signal active viewers and extend session time",
            "5 minutes per video",
        ))
    if avg_like_ratio <= 1.5:
        recommendations.append(recommend(
            Severity.MEDIUM, ENGAGEMENT,
            "Ask for a like right after delivering the video's first payoff",
            "Higher like ratio improves recommendation signals",
            "1 minute per video",
        ))
    if ratio <= 8 and channel.subscriber_count > 0:
        recommendations.append(recommend(
            Severity.MEDIUM, ENGAGEMENT,
            "Use community posts and end screens to bring existing subscribers back to new uploads",
            f"Only {ratio:.1f}% of subscribers watch an average video",
            "30 minutes per week",
        ))
    if engagement_std > 5:
        recommendations.append(recommend(
            Severity.LOW, ENGAGEMENT,
            "Study the best-engaging videos and repeat their topic and format",
            "Less variation between hits and misses",
            "2 hours review",
        ))

    top = sorted(videos, key=lambda video: video.engagement_rate, reverse=True)[:5]
    return CategoryScore(
        name=ENGAGEMENT,
        score=score,
        subscores=subscores,
        recommendations=tuple(recommendations),
        details={
            "averageViews": avg_views,
            "averageEngagementRate": avg_engagement,
            "engagementStdDev": engagement_std,
            "viewsToSubscribersRatio": ratio,
            "averageLikeRatio": avg_like_ratio,
            "averageCommentRatio": avg_comment_ratio,
            "benchmarks": {
                "viewsToSubscribers": benchmark(ratio, 15, 8),
                "likeRatio": benchmark(avg_like_ratio, 3, 1.5),
                "commentRatio": benchmark(avg_comment_ratio, 1, 0.5),
            },
            "topVideos": [
                {"title": video.title, "engagementRate": video.engagement_rate, "views": video.views}
                for video in top
            ],
        },
    )
