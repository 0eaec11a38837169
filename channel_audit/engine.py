"""Compose metrics, analyzers, insights and aggregation into one AnalysisReport."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional

from channel_audit.analyzers.branding import analyze_branding
from channel_audit.analyzers.content_quality import analyze_content_quality
from channel_audit.analyzers.content_strategy import analyze_content_strategy
from channel_audit.analyzers.engagement import analyze_engagement
from channel_audit.analyzers.playlists import analyze_playlists
from channel_audit.analyzers.seo import analyze_seo
from channel_audit.analyzers.transcript import analyze_transcripts
from channel_audit.insights import attach_insights, generate_insights
from channel_audit.metrics import extract_all
from channel_audit.models import AnalysisReport, CategoryScore, ChannelBundle, Severity
from channel_audit.recommendations import aggregate_recommendations
from channel_audit.scoring import compute_coverage, grade_for, overall_score
from channel_audit.statistics import ChannelStatistics
from channel_audit.weights import (
    BRANDING,
    CONTENT_QUALITY,
    CONTENT_STRATEGY,
    ENGAGEMENT,
    PLAYLIST_STRUCTURE,
    SEO,
    TRANSCRIPT,
)


@dataclass(frozen=True)
class AnalysisConfig:
    recommendation_cap: int = 10
    transcript_sample_size: int = 20
    min_reliable_videos: int = 10


def analyze_channel(
    bundle: ChannelBundle,
    config: Optional[AnalysisConfig] = None,
    generated_at: Optional[datetime] = None,
) -> AnalysisReport:
    """Run the full audit over one bundle. Pure apart from progress output."""
    config = config or AnalysisConfig()
    channel = bundle.channel

    print("\n🔬 YouTube Channel Analysis")
    print("=" * 50)

    print(f"📹 Extracting metrics for {len(bundle.videos)} videos...")
    videos = extract_all(bundle.videos)

    categories: Dict[str, CategoryScore] = {}
    print("🎨 Analyzing branding...")
    categories[BRANDING] = analyze_branding(channel, videos)
    print("📅 Analyzing content strategy...")
    categories[CONTENT_STRATEGY] = analyze_content_strategy(videos)
    print("🏷️  Analyzing SEO...")
    categories[SEO] = analyze_seo(videos)
    print("📈 Analyzing engagement...")
    categories[ENGAGEMENT] = analyze_engagement(channel, videos)
    print("🎬 Analyzing content quality...")
    categories[CONTENT_QUALITY] = analyze_content_quality(videos)
    print("📚 Analyzing playlists...")
    categories[PLAYLIST_STRUCTURE] = analyze_playlists(bundle.playlists)
    print("🗣️  Analyzing transcripts...")
    categories[TRANSCRIPT] = analyze_transcripts(videos, bundle.transcripts, config.transcript_sample_size)
    transcripts_analyzed = categories[TRANSCRIPT].details.get("transcriptsAnalyzed", 0)

    print("🔍 Generating insights...")
    stats = ChannelStatistics.build(channel, videos, categories)
    insights = generate_insights(stats)
    categories = attach_insights(categories, insights)

    print("🎯 Prioritizing recommendations...")
    recommendations = aggregate_recommendations(categories, config.recommendation_cap)

    score = overall_score(categories, transcripts_analyzed)
    grade = grade_for(score)
    coverage = compute_coverage(channel, len(videos), config.min_reliable_videos, transcripts_analyzed)

    print("\n✅ Analysis complete!")
    print(f"📊 Overall Score: {score:.1f}/100 ({grade})")
    print(f"🔍 Insights: {len(insights)}")
    print(f"📋 Recommendations: {len(recommendations)}")
    for severity in Severity:
        print(f"   - {severity.value}: {sum(1 for rec in recommendations if rec.priority is severity)}")
    print(f"📐 Coverage: {coverage.ratio * 100:.1f}% ({coverage.confidence} confidence)")

    return AnalysisReport(
        channel=channel,
        categories=categories,
        overall_score=score,
        overall_grade=grade,
        insights=insights,
        recommendations=recommendations,
        coverage=coverage,
        generated_at=generated_at or datetime.now(timezone.utc).replace(tzinfo=None),
        videos=videos,
    )
