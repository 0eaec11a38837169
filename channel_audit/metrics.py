"""Per-video metric extraction: one VideoRecord in, one VideoMetrics out."""

from __future__ import annotations

from typing import List, Mapping, Optional, Sequence, Tuple

from channel_audit import classifiers
from channel_audit.models import ContentFlags, VideoFormat, VideoMetrics, VideoRecord
from channel_audit.parsing import clamp_score, parse_duration, safe_int


def classify_format(duration_seconds: int) -> VideoFormat:
    if duration_seconds < 60:
        return VideoFormat.SHORT
    if duration_seconds < 300:
        return VideoFormat.QUICK_TUTORIAL
    if duration_seconds < 1200:
        return VideoFormat.STANDARD
    if duration_seconds < 3600:
        return VideoFormat.LONG_FORM
    return VideoFormat.EXTENDED_OR_STREAM


def engagement_rate(views: int, likes: int, comments: int) -> float:
    """(Likes + Comments) / Views x 100, or 0 without views."""
    if views <= 0:
        return 0.0
    return (likes + comments) / views * 100


def score_title(title: Optional[str]) -> float:
    title = title or ""
    length = len(title)
    score = 0

    if 30 <= length <= 60:
        score += 25
    elif length > 60:
        score += 15
    else:
        score += 10

    if len(title.split()) >= 5:
        score += 20
    if classifiers.has_power_word(title):
        score += 20
    if classifiers.has_digit(title):
        score += 15
    if "?" in title:
        score += 10
    if classifiers.is_explainer_title(title):
        score += 10

    return clamp_score(score)


def score_description(description: Optional[str]) -> Tuple[float, List[str]]:
    if not description:
        return 0.0, ["no description"]

    score = 0
    if len(description) >= 200:
        score += 25
    if "http" in description:
        score += 15
    if "\n" in description:
        score += 15
    if classifiers.has_timestamp_pattern(description):
        score += 20
    if classifiers.has_call_to_action(description):
        score += 15
    if classifiers.has_social_keyword(description):
        score += 10

    return clamp_score(score), []


def score_tags(tags: Sequence[str]) -> Tuple[float, List[str]]:
    if not tags:
        return 0.0, ["no tags"]

    issues = []
    count = len(tags)
    score = 0

    if 8 <= count <= 15:
        score += 40
    elif 5 <= count <= 7:
        score += 25
    elif count < 5:
        issues.append("too few tags")
    else:
        issues.append("too many tags")

    # Mix of broad (short) and long-tail (long) tags
    if any(len(tag) <= 15 for tag in tags) and any(len(tag) > 15 for tag in tags):
        score += 20
    if any(" " in tag for tag in tags):
        score += 20
    if any(len(tag) > 20 for tag in tags):
        score += 20

    return clamp_score(score), issues


def score_thumbnails(thumbnails: Optional[Mapping]) -> Tuple[float, List[str]]:
    if not thumbnails:
        return 30.0, ["no thumbnails"]

    score = 60
    if thumbnails.get("high"):
        score += 20
    if thumbnails.get("maxres"):
        score += 20
    return clamp_score(score), []


def extract_video_metrics(video: VideoRecord) -> VideoMetrics:
    """Derive every per-video score and flag from one raw record."""
    views = safe_int(video.view_count)
    likes = safe_int(video.like_count)
    comments = safe_int(video.comment_count)
    duration = parse_duration(video.iso_duration)
    title = video.title or ""
    description = video.description or ""
    tags = tuple(video.tags or ())

    description_score, description_issues = score_description(video.description)
    tags_score, tag_issues = score_tags(tags)
    thumbnail_score, thumbnail_issues = score_thumbnails(video.thumbnails)

    flags = ContentFlags(
        has_hook=classifiers.has_hook(title, description),
        has_timestamps=classifiers.has_timestamps(description),
        has_call_to_action=classifiers.has_call_to_action(description),
        has_links=classifiers.has_links(description),
    )

    return VideoMetrics(
        video_id=video.id,
        title=title,
        description=description,
        tags=tags,
        published_at=video.published_at,
        duration_seconds=duration,
        views=views,
        likes=likes,
        comments=comments,
        engagement_rate=engagement_rate(views, likes, comments),
        like_to_view_ratio=(likes / views * 100) if views > 0 else 0.0,
        comment_to_view_ratio=(comments / views * 100) if views > 0 else 0.0,
        format=classify_format(duration),
        title_score=score_title(title),
        description_score=description_score,
        tags_score=tags_score,
        thumbnail_score=thumbnail_score,
        flags=flags,
        has_high_res_thumbnail=bool(video.thumbnails and (video.thumbnails.get("high") or video.thumbnails.get("maxres"))),
        issues=tuple(description_issues + tag_issues + thumbnail_issues),
    )


def extract_all(videos: Sequence[VideoRecord]) -> Tuple[VideoMetrics, ...]:
    return tuple(extract_video_metrics(video) for video in videos)
