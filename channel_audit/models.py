"""Immutable records flowing through the channel audit pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple


class InvalidBundleError(ValueError):
    """Raised when the input bundle is structurally unusable."""


class Severity(str, Enum):
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        return PRIORITY_RANK[self]


PRIORITY_RANK = {
    Severity.CRITICAL: 4,
    Severity.HIGH: 3,
    Severity.MEDIUM: 2,
    Severity.LOW: 1,
}


class VideoFormat(str, Enum):
    SHORT = "Short"
    QUICK_TUTORIAL = "Quick Tutorial"
    STANDARD = "Standard"
    LONG_FORM = "Long-form"
    EXTENDED_OR_STREAM = "Extended / Stream"


# ===== Inputs =====


@dataclass(frozen=True)
class ChannelRecord:
    id: str
    name: str
    description: str = ""
    subscriber_count: int = 0
    total_views: int = 0
    video_count: int = 0
    created_at: Optional[datetime] = None
    country: Optional[str] = None
    custom_url: Optional[str] = None
    thumbnails: Mapping[str, Any] = field(default_factory=dict)
    banner_url: Optional[str] = None


@dataclass(frozen=True)
class VideoRecord:
    id: str
    title: str
    description: Optional[str] = None
    tags: Tuple[str, ...] = ()
    published_at: Optional[datetime] = None
    iso_duration: str = ""
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    thumbnails: Optional[Mapping[str, Any]] = None
    category_id: Optional[str] = None


@dataclass(frozen=True)
class TranscriptSentence:
    timestamp_seconds: float
    text: str


@dataclass(frozen=True)
class TranscriptRecord:
    video_id: str
    sentences: Tuple[TranscriptSentence, ...] = ()
    full_text: str = ""

    @property
    def word_count(self) -> int:
        return len(self.full_text.split())


@dataclass(frozen=True)
class PlaylistRecord:
    id: str
    title: str
    item_count: int = 0


@dataclass(frozen=True)
class ChannelBundle:
    channel: ChannelRecord
    videos: Tuple[VideoRecord, ...] = ()
    playlists: Tuple[PlaylistRecord, ...] = ()
    transcripts: Mapping[str, Optional[TranscriptRecord]] = field(default_factory=dict)

    def transcript_for(self, video_id: str) -> Optional[TranscriptRecord]:
        return self.transcripts.get(video_id)


# ===== Derived values =====


@dataclass(frozen=True)
class ContentFlags:
    has_hook: bool = False
    has_timestamps: bool = False
    has_call_to_action: bool = False
    has_links: bool = False


@dataclass(frozen=True)
class VideoMetrics:
    video_id: str
    title: str
    description: str
    tags: Tuple[str, ...]
    published_at: Optional[datetime]
    duration_seconds: int
    views: int
    likes: int
    comments: int
    engagement_rate: float
    like_to_view_ratio: float
    comment_to_view_ratio: float
    format: VideoFormat
    title_score: float
    description_score: float
    tags_score: float
    thumbnail_score: float
    flags: ContentFlags
    has_high_res_thumbnail: bool = False
    issues: Tuple[str, ...] = ()

    @property
    def title_length(self) -> int:
        return len(self.title)

    @property
    def description_length(self) -> int:
        return len(self.description)

    @property
    def tag_count(self) -> int:
        return len(self.tags)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.video_id,
            "title": self.title,
            "url": f"https://youtube.com/watch?v={self.video_id}",
            "publishedAt": self.published_at.isoformat() if self.published_at else None,
            "durationSeconds": self.duration_seconds,
            "format": self.format.value,
            "views": self.views,
            "likes": self.likes,
            "comments": self.comments,
            "tagCount": self.tag_count,
            "engagementRate": round(self.engagement_rate, 2),
            "likeToViewRatio": round(self.like_to_view_ratio, 3),
            "commentToViewRatio": round(self.comment_to_view_ratio, 3),
            "titleScore": round(self.title_score, 1),
            "descriptionScore": round(self.description_score, 1),
            "tagsScore": round(self.tags_score, 1),
            "thumbnailScore": round(self.thumbnail_score, 1),
            "flags": {
                "hasHook": self.flags.has_hook,
                "hasTimestamps": self.flags.has_timestamps,
                "hasCallToAction": self.flags.has_call_to_action,
                "hasLinks": self.flags.has_links,
            },
            "issues": list(self.issues),
        }


@dataclass(frozen=True)
class Insight:
    category: str
    severity: Severity
    finding: str
    impact: str
    example: str
    solution: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "severity": self.severity.value,
            "finding": self.finding,
            "impact": self.impact,
            "example": self.example,
            "solution": self.solution,
        }


@dataclass(frozen=True)
class Recommendation:
    priority: Severity
    category: str
    action: str
    impact: str
    time_investment: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "priority": self.priority.value,
            "category": self.category,
            "action": self.action,
            "impact": self.impact,
            "timeInvestment": self.time_investment,
        }


@dataclass(frozen=True)
class CategoryScore:
    name: str
    score: float
    subscores: Mapping[str, float] = field(default_factory=dict)
    insights: Tuple[Insight, ...] = ()
    recommendations: Tuple[Recommendation, ...] = ()
    details: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "score": round(self.score, 1),
            "subscores": {key: round(value, 1) for key, value in self.subscores.items()},
            "insights": [insight.to_dict() for insight in self.insights],
            "recommendations": [rec.to_dict() for rec in self.recommendations],
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class Coverage:
    videos_analyzed: int
    channel_video_count: int
    ratio: float
    confidence: str
    transcripts_analyzed: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "videosAnalyzed": self.videos_analyzed,
            "channelVideoCount": self.channel_video_count,
            "coveragePercent": round(self.ratio * 100, 1),
            "confidence": self.confidence,
            "transcriptsAnalyzed": self.transcripts_analyzed,
        }


@dataclass(frozen=True)
class AnalysisReport:
    channel: ChannelRecord
    categories: Mapping[str, CategoryScore]
    overall_score: float
    overall_grade: str
    insights: Tuple[Insight, ...]
    recommendations: Tuple[Recommendation, ...]
    coverage: Coverage
    generated_at: datetime
    videos: Tuple[VideoMetrics, ...] = ()

    def category(self, name: str) -> Optional[CategoryScore]:
        return self.categories.get(name)

    def channel_summary(self) -> Dict[str, Any]:
        channel = self.channel
        return {
            "id": channel.id,
            "name": channel.name,
            "description": channel.description,
            "subscriberCount": channel.subscriber_count,
            "totalViews": channel.total_views,
            "videoCount": channel.video_count,
            "createdAt": channel.created_at.isoformat() if channel.created_at else None,
            "country": channel.country,
            "customUrl": channel.custom_url,
            "thumbnailUrl": (channel.thumbnails.get("high") or {}).get("url"),
        }

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready view of the report (camelCase keys, rounded numbers)."""
        return {
            "generatedAt": self.generated_at.isoformat(),
            "channel": self.channel_summary(),
            "overallScore": round(self.overall_score, 1),
            "overallGrade": self.overall_grade,
            "categories": {name: score.to_dict() for name, score in self.categories.items()},
            "insights": [insight.to_dict() for insight in self.insights],
            "recommendations": [rec.to_dict() for rec in self.recommendations],
            "coverage": self.coverage.to_dict(),
            "videos": [video.to_dict() for video in self.videos],
        }
