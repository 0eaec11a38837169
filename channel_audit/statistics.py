"""Channel-wide numbers read by the insight rules, computed once per report."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from channel_audit import classifiers
from channel_audit.analyzers.common import mean, population_std, share
from channel_audit.models import CategoryScore, ChannelRecord, VideoMetrics
from channel_audit.weights import BRANDING, CONTENT_STRATEGY, ENGAGEMENT, PLAYLIST_STRUCTURE, TRANSCRIPT

LONG_TITLE = 70


@dataclass(frozen=True)
class ChannelStatistics:
    total_videos: int
    no_tag_count: int
    first_untagged_title: Optional[str]
    avg_title_length: float
    shortest_title: Optional[str]
    long_title_count: int
    longest_title: Optional[str]
    avg_description_length: float
    shortest_description_title: Optional[str]
    timestamps_pct: float
    cta_pct: float
    avg_engagement_rate: float
    engagement_std: float
    views_to_subs_ratio: float
    subscriber_count: int
    upload_consistency: float
    avg_gap_days: float
    longest_gap_days: float
    longest_gap_after: str
    upload_frequency: str
    dated_videos: int
    formats_used: int
    weak_hook_count: int
    weakest_hook_title: Optional[str]
    playlist_count: int
    about_section_score: float
    channel_description_length: float
    has_banner: bool
    high_res_thumbnail_pct: float
    transcripts_analyzed: int

    @classmethod
    def build(
        cls,
        channel: ChannelRecord,
        videos: Sequence[VideoMetrics],
        categories: Mapping[str, CategoryScore],
    ) -> "ChannelStatistics":
        untagged = [video for video in videos if not video.tags]
        by_title_length = sorted(videos, key=lambda video: video.title_length)
        long_titles = [video for video in videos if video.title_length > LONG_TITLE]
        by_description = sorted(videos, key=lambda video: video.description_length)
        hooks = [(classifiers.hook_strength(video.title), video.title) for video in videos]
        weak_hooks = [item for item in hooks if item[0] < 30]

        strategy = categories[CONTENT_STRATEGY].details
        upload = strategy["uploadPattern"]
        engagement = categories[ENGAGEMENT].details
        playlists = categories[PLAYLIST_STRUCTURE].details
        branding = categories[BRANDING]
        transcript = categories.get(TRANSCRIPT)

        return cls(
            total_videos=len(videos),
            no_tag_count=len(untagged),
            first_untagged_title=untagged[0].title if untagged else None,
            avg_title_length=mean(video.title_length for video in videos),
            shortest_title=by_title_length[0].title if by_title_length else None,
            long_title_count=len(long_titles),
            longest_title=by_title_length[-1].title if long_titles else None,
            avg_description_length=mean(video.description_length for video in videos),
            shortest_description_title=by_description[0].title if by_description else None,
            timestamps_pct=share(videos, lambda video: video.flags.has_timestamps),
            cta_pct=share(videos, lambda video: video.flags.has_call_to_action),
            avg_engagement_rate=mean(video.engagement_rate for video in videos),
            engagement_std=population_std([video.engagement_rate for video in videos]),
            views_to_subs_ratio=engagement["viewsToSubscribersRatio"],
            subscriber_count=channel.subscriber_count,
            upload_consistency=upload["consistencyScore"],
            avg_gap_days=upload["averageDaysBetween"],
            longest_gap_days=upload["longestGapDays"],
            longest_gap_after=upload["longestGapAfter"],
            upload_frequency=upload["frequency"],
            dated_videos=upload["datedVideos"],
            formats_used=strategy["formatDiversity"]["formatsUsed"],
            weak_hook_count=len(weak_hooks),
            weakest_hook_title=min(hooks, key=lambda item: item[0])[1] if hooks else None,
            playlist_count=playlists["playlistCount"],
            about_section_score=branding.subscores["aboutSection"],
            channel_description_length=len(channel.description or ""),
            has_banner=bool(channel.banner_url),
            high_res_thumbnail_pct=share(videos, lambda video: video.has_high_res_thumbnail),
            transcripts_analyzed=transcript.details.get("transcriptsAnalyzed", 0) if transcript else 0,
        )
