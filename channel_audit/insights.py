"""
Insight rules.

Each rule reads a ChannelStatistics and returns an Insight or None. Rules are
independent of one another; generate_insights evaluates all of them and keeps
the non-empty results in the order of INSIGHT_RULES.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from channel_audit.models import CategoryScore, Insight, Severity
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

Rule = Callable[[ChannelStatistics], Optional[Insight]]


def _pct(count: int, total: int) -> float:
    return count / total * 100 if total else 0.0


def missing_tags(stats: ChannelStatistics) -> Optional[Insight]:
    if not stats.total_videos or not stats.no_tag_count:
        return None
    pct = _pct(stats.no_tag_count, stats.total_videos)
    return Insight(
        category=SEO,
        severity=Severity.CRITICAL if pct > 10 else Severity.MEDIUM,
        finding=f"{stats.no_tag_count} out of {stats.total_videos} videos have no tags ({pct:.0f}%)",
        impact="Untagged videos give search and suggested traffic nothing to match on",
        example=f'"{stats.first_untagged_title}" has no tags',
        solution="Add 8-15 tags per video: the main keyword, 2-3 broad terms and several long-tail phrases",
    )


def short_titles(stats: ChannelStatistics) -> Optional[Insight]:
    if not stats.total_videos or stats.avg_title_length >= 30:
        return None
    return Insight(
        category=SEO,
        severity=Severity.HIGH,
        finding=f"Average title length is {stats.avg_title_length:.0f} characters (optimal: 30-60)",
        impact="Short titles carry too few keywords to rank or to explain the video",
        example=f'Shortest title: "{stats.shortest_title}"',
        solution="Expand titles to 30-60 characters with the main keyword and a clear benefit",
    )


def long_titles(stats: ChannelStatistics) -> Optional[Insight]:
    if not stats.total_videos or _pct(stats.long_title_count, stats.total_videos) <= 30:
        return None
    return Insight(
        category=SEO,
        severity=Severity.LOW,
        finding=f"{stats.long_title_count} out of {stats.total_videos} titles are longer than 70 characters",
        impact="Long titles get truncated in search results and on mobile",
        example=f'Longest title: "{stats.longest_title}"',
        solution="Front-load the keyword and keep titles under 60 characters",
    )


def thin_descriptions(stats: ChannelStatistics) -> Optional[Insight]:
    if not stats.total_videos or stats.avg_description_length >= 100:
        return None
    return Insight(
        category=SEO,
        severity=Severity.HIGH,
        finding=f"Average description length is {stats.avg_description_length:.0f} characters",
        impact="Thin descriptions leave search with almost no text to index",
        example=f'Shortest description belongs to "{stats.shortest_description_title}"',
        solution="Write 200+ character descriptions: summary, timestamps, links and a call to action",
    )


def missing_timestamps(stats: ChannelStatistics) -> Optional[Insight]:
    if not stats.total_videos or stats.timestamps_pct >= 30:
        return None
    return Insight(
        category=CONTENT_QUALITY,
        severity=Severity.MEDIUM,
        finding=f"Only {stats.timestamps_pct:.0f}% of videos have chapter timestamps",
        impact="Without chapters viewers cannot jump to the part they need and key moments do not show in search",
        example=f"{stats.total_videos - round(stats.timestamps_pct * stats.total_videos / 100)} videos without timestamps",
        solution="Add 0:00-style chapters to every video longer than 5 minutes",
    )


def missing_calls_to_action(stats: ChannelStatistics) -> Optional[Insight]:
    if not stats.total_videos or stats.cta_pct >= 50:
        return None
    return Insight(
        category=CONTENT_QUALITY,
        severity=Severity.MEDIUM,
        finding=f"Only {stats.cta_pct:.0f}% of descriptions contain a call to action",
        impact="Viewers are never asked to subscribe, comment or watch next",
        example="No subscribe/like/comment/share prompt in most descriptions",
        solution="Add a one-line call to action template to every description",
    )


def low_engagement(stats: ChannelStatistics) -> Optional[Insight]:
    if not stats.total_videos or stats.avg_engagement_rate >= 2:
        return None
    return Insight(
        category=ENGAGEMENT,
        severity=Severity.HIGH,
        finding=f"Average engagement rate is {stats.avg_engagement_rate:.2f}% (healthy: 2%+)",
        impact="Few likes and comments weaken recommendation signals",
        example=f"{stats.avg_engagement_rate:.2f} likes+comments per 100 views",
        solution="Ask a specific question in each video and reply to early comments",
    )


def inconsistent_engagement(stats: ChannelStatistics) -> Optional[Insight]:
    if stats.total_videos < 2 or stats.engagement_std <= 5:
        return None
    return Insight(
        category=ENGAGEMENT,
        severity=Severity.MEDIUM,
        finding=f"Engagement varies widely between videos (std dev {stats.engagement_std:.1f} points)",
        impact="Results depend on a few hits rather than a repeatable format",
        example=f"Average {stats.avg_engagement_rate:.2f}% with a spread of {stats.engagement_std:.1f}",
        solution="Identify what the best-engaging videos share and repeat it",
    )


def low_reach(stats: ChannelStatistics) -> Optional[Insight]:
    if not stats.total_videos or stats.subscriber_count <= 0 or stats.views_to_subs_ratio >= 8:
        return None
    return Insight(
        category=ENGAGEMENT,
        severity=Severity.HIGH,
        finding=f"An average video reaches {stats.views_to_subs_ratio:.1f}% of subscribers (healthy: 8%+)",
        impact="Subscribers are not coming back for new uploads",
        example=f"{stats.subscriber_count:,} subscribers",
        solution="Use community posts, end screens and a fixed schedule to re-engage subscribers",
    )


def irregular_uploads(stats: ChannelStatistics) -> Optional[Insight]:
    if stats.dated_videos < 3 or stats.upload_consistency >= 50:
        return None
    return Insight(
        category=CONTENT_STRATEGY,
        severity=Severity.HIGH,
        finding=f"Upload consistency is {stats.upload_consistency:.0f}/100 ({stats.upload_frequency}, every {stats.avg_gap_days:.1f} days on average)",
        impact="Unpredictable uploads make it hard for viewers to build a habit",
        example=f'Widest gap: {stats.longest_gap_days:.0f} days after "{stats.longest_gap_after}"',
        solution="Pick a realistic fixed schedule and batch-produce videos to keep it",
    )


def infrequent_uploads(stats: ChannelStatistics) -> Optional[Insight]:
    if stats.dated_videos < 2 or stats.avg_gap_days <= 15:
        return None
    return Insight(
        category=CONTENT_STRATEGY,
        severity=Severity.MEDIUM,
        finding=f"New videos arrive every {stats.avg_gap_days:.0f} days on average",
        impact="Long gaps reduce how often the channel appears in subscription feeds",
        example=f"Longest gap: {stats.longest_gap_days:.0f} days",
        solution="Publish at least every 1-2 weeks, using Shorts to fill gaps",
    )


def single_format(stats: ChannelStatistics) -> Optional[Insight]:
    if stats.total_videos < 5 or stats.formats_used > 1:
        return None
    return Insight(
        category=CONTENT_STRATEGY,
        severity=Severity.LOW,
        finding=f"All {stats.total_videos} videos use a single length format",
        impact="The channel misses viewers on other surfaces (Shorts feed, long watch sessions)",
        example="Every analyzed video falls into the same duration bucket",
        solution="Test a second format alongside the current one",
    )


def weak_hooks(stats: ChannelStatistics) -> Optional[Insight]:
    if not stats.total_videos or _pct(stats.weak_hook_count, stats.total_videos) <= 50:
        return None
    return Insight(
        category=CONTENT_QUALITY,
        severity=Severity.MEDIUM,
        finding=f"{stats.weak_hook_count} out of {stats.total_videos} titles have a weak hook",
        impact="Titles without curiosity cues get fewer clicks",
        example=f'Weakest title: "{stats.weakest_hook_title}"',
        solution="Use a question, a number, urgency or a bold claim in titles",
    )


def few_playlists(stats: ChannelStatistics) -> Optional[Insight]:
    if stats.playlist_count >= 5:
        return None
    if stats.playlist_count == 0:
        return Insight(
            category=PLAYLIST_STRUCTURE,
            severity=Severity.HIGH,
            finding="The channel has no public playlists",
            impact="Viewers have no guided path to the next video",
            example="0 playlists",
            solution="Create 5+ playlists grouping videos by topic or series",
        )
    return Insight(
        category=PLAYLIST_STRUCTURE,
        severity=Severity.MEDIUM,
        finding=f"The channel has only {stats.playlist_count} playlists",
        impact="Limited binge paths for new viewers",
        example=f"{stats.playlist_count} playlists",
        solution="Grow to 5+ topic playlists",
    )


def weak_about_section(stats: ChannelStatistics) -> Optional[Insight]:
    if stats.about_section_score >= 50:
        return None
    return Insight(
        category=BRANDING,
        severity=Severity.HIGH,
        finding=f"About section scores {stats.about_section_score:.0f}/100",
        impact="Visitors cannot tell what the channel is about or where else to find it",
        example=f"Channel description is {stats.channel_description_length:.0f} characters",
        solution="Write 300+ characters describing the niche, schedule and links",
    )


def missing_banner(stats: ChannelStatistics) -> Optional[Insight]:
    if stats.has_banner:
        return None
    return Insight(
        category=BRANDING,
        severity=Severity.MEDIUM,
        finding="No channel banner detected",
        impact="The channel page looks unfinished to first-time visitors",
        example="brandingSettings has no banner image",
        solution="Upload a 2560x1440 banner stating the niche and upload schedule",
    )


def low_res_thumbnails(stats: ChannelStatistics) -> Optional[Insight]:
    if not stats.total_videos or stats.high_res_thumbnail_pct >= 50:
        return None
    return Insight(
        category=SEO,
        severity=Severity.MEDIUM,
        finding=f"Only {stats.high_res_thumbnail_pct:.0f}% of videos have high-resolution thumbnails",
        impact="Blurry thumbnails lose clicks on large screens",
        example="Most videos expose only default-size thumbnails",
        solution="Upload custom 1280x720 thumbnails",
    )


def transcripts_unavailable(stats: ChannelStatistics) -> Optional[Insight]:
    if stats.transcripts_analyzed:
        return None
    return Insight(
        category=TRANSCRIPT,
        severity=Severity.LOW,
        finding="Transcripts unavailable",
        impact="Spoken hooks, calls to action and pacing could not be assessed",
        example="0 transcripts supplied",
        solution="Enable captions or supply transcripts to include spoken-content analysis",
    )


INSIGHT_RULES: Tuple[Rule, ...] = (
    missing_tags,
    short_titles,
    long_titles,
    thin_descriptions,
    missing_timestamps,
    missing_calls_to_action,
    low_engagement,
    inconsistent_engagement,
    low_reach,
    irregular_uploads,
    infrequent_uploads,
    single_format,
    weak_hooks,
    few_playlists,
    weak_about_section,
    missing_banner,
    low_res_thumbnails,
    transcripts_unavailable,
)


def generate_insights(stats: ChannelStatistics, rules: Tuple[Rule, ...] = INSIGHT_RULES) -> Tuple[Insight, ...]:
    found = (rule(stats) for rule in rules)
    return tuple(insight for insight in found if insight is not None)


def attach_insights(
    categories: Mapping[str, CategoryScore],
    insights: Tuple[Insight, ...],
) -> Dict[str, CategoryScore]:
    """New category values carrying the insights that belong to them."""
    grouped: Dict[str, List[Insight]] = {name: [] for name in categories}
    for insight in insights:
        if insight.category in grouped:
            grouped[insight.category].append(insight)
    return {
        name: replace(category, insights=category.insights + tuple(grouped[name]))
        for name, category in categories.items()
    }
