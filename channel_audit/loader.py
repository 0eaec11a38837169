"""Build an immutable ChannelBundle from the fetcher's raw JSON dictionary."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from channel_audit.models import (
    ChannelBundle,
    ChannelRecord,
    InvalidBundleError,
    PlaylistRecord,
    TranscriptRecord,
    TranscriptSentence,
    VideoRecord,
)
from channel_audit.parsing import parse_published_at, parse_timestamp, safe_int


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def load_channel(raw: Any) -> ChannelRecord:
    if not isinstance(raw, Mapping):
        raise InvalidBundleError("Bundle has no channel record")
    channel_id = raw.get("id")
    if not channel_id:
        raise InvalidBundleError("Channel record has no id")

    thumbnails = raw.get("thumbnails")
    return ChannelRecord(
        id=str(channel_id),
        name=_text(raw.get("title") or raw.get("name")),
        description=_text(raw.get("description")),
        subscriber_count=safe_int(raw.get("subscriberCount")),
        total_views=safe_int(raw.get("viewCount")),
        video_count=safe_int(raw.get("videoCount")),
        created_at=parse_published_at(raw.get("publishedAt")),
        country=raw.get("country") or None,
        custom_url=raw.get("customUrl") or None,
        thumbnails=dict(thumbnails) if isinstance(thumbnails, Mapping) else {},
        banner_url=raw.get("bannerUrl") or None,
    )


def load_video(raw: Any, index: int) -> VideoRecord:
    if not isinstance(raw, Mapping):
        raise InvalidBundleError(f"Video entry {index} is not an object")
    video_id = raw.get("id")
    if not video_id:
        raise InvalidBundleError(f"Video entry {index} has no id")

    statistics = raw.get("statistics")
    if not isinstance(statistics, Mapping):
        statistics = raw

    tags = raw.get("tags") or ()
    thumbnails = raw.get("thumbnails")
    description = raw.get("description")

    return VideoRecord(
        id=str(video_id),
        title=_text(raw.get("title")),
        description=description if isinstance(description, str) else None,
        tags=tuple(str(tag) for tag in tags if isinstance(tag, (str, int, float))),
        published_at=parse_published_at(raw.get("publishedAt")),
        iso_duration=_text(raw.get("duration")),
        view_count=safe_int(statistics.get("viewCount")),
        like_count=safe_int(statistics.get("likeCount")),
        comment_count=safe_int(statistics.get("commentCount")),
        thumbnails=dict(thumbnails) if isinstance(thumbnails, Mapping) and thumbnails else None,
        category_id=raw.get("categoryId") or None,
    )


def load_playlist(raw: Any, index: int) -> PlaylistRecord:
    if not isinstance(raw, Mapping):
        raise InvalidBundleError(f"Playlist entry {index} is not an object")
    return PlaylistRecord(
        id=str(raw.get("id") or index),
        title=_text(raw.get("title")),
        item_count=safe_int(raw.get("itemCount")),
    )


def load_transcript(video_id: str, raw: Any) -> Optional[TranscriptRecord]:
    """Transcript entries may be null, a plain string or an object with sentences."""
    if raw is None:
        return None
    if isinstance(raw, str):
        return TranscriptRecord(video_id=video_id, full_text=raw) if raw.strip() else None
    if not isinstance(raw, Mapping):
        return None

    sentences = tuple(
        TranscriptSentence(
            timestamp_seconds=parse_timestamp(item.get("timestamp", item.get("start"))),
            text=_text(item.get("text")),
        )
        for item in raw.get("sentences") or ()
        if isinstance(item, Mapping)
    )
    full_text = _text(raw.get("fullText")) or " ".join(sentence.text for sentence in sentences)
    if not full_text.strip():
        return None
    return TranscriptRecord(video_id=video_id, sentences=sentences, full_text=full_text)


def load_bundle(raw: Any) -> ChannelBundle:
    """
    Convert a raw_data.json dictionary into a ChannelBundle.

    Raises InvalidBundleError when the channel record is missing or a video
    entry is not an object with an id. Everything else degrades to defaults.
    """
    if not isinstance(raw, Mapping):
        raise InvalidBundleError("Bundle must be a JSON object")

    channel = load_channel(raw.get("channel"))

    raw_videos = raw.get("videos") or []
    if not isinstance(raw_videos, list):
        raise InvalidBundleError("Bundle 'videos' must be a list")
    videos: Tuple[VideoRecord, ...] = tuple(load_video(item, i) for i, item in enumerate(raw_videos))

    raw_playlists = raw.get("playlists") or []
    if not isinstance(raw_playlists, list):
        raise InvalidBundleError("Bundle 'playlists' must be a list")
    playlists = tuple(load_playlist(item, i) for i, item in enumerate(raw_playlists))

    raw_transcripts = raw.get("transcripts") or {}
    transcripts: Dict[str, Optional[TranscriptRecord]] = {}
    if isinstance(raw_transcripts, Mapping):
        for video_id, item in raw_transcripts.items():
            transcripts[str(video_id)] = load_transcript(str(video_id), item)

    return ChannelBundle(
        channel=channel,
        videos=videos,
        playlists=playlists,
        transcripts=transcripts,
    )


def load_bundle_file(path: Union[str, Path]) -> ChannelBundle:
    with open(path, "r", encoding="utf-8") as f:
        return load_bundle(json.load(f))
