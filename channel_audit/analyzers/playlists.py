"""Playlist structure: organization, binge potential and thematic grouping."""

from __future__ import annotations

from typing import Sequence

from channel_audit import classifiers
from channel_audit.analyzers.common import mean, recommend
from channel_audit.models import CategoryScore, PlaylistRecord, Severity
from channel_audit.parsing import clamp_score
from channel_audit.weights import NO_PLAYLIST_SCORE, PLAYLIST_STRUCTURE, weighted_score

BINGE_TIERS = {"High": 90.0, "Medium": 65.0, "Low": 35.0}

CREATE_PLAYLISTS_ACTION = "Create 5+ playlists to organize your content by topic"


def organization_score(count: int, avg_items: float) -> float:
    score = 20
    if count >= 3:
        score += 30
    if count >= 5:
        score += 20
    if count >= 8:
        score += 20
    if avg_items >= 5:
        score += 10
    return clamp_score(score)


def binge_tier(longest: int, avg_items: float) -> str:
    if longest >= 20 or avg_items >= 8:
        return "High"
    if longest >= 10:
        return "Medium"
    return "Low"


def thematic_score(playlists: Sequence[PlaylistRecord]) -> float:
    keywords = set()
    for playlist in playlists:
        keywords.update(classifiers.keyword_tokens(playlist.title, min_length=4))
    score = 30
    if len(keywords) >= 3:
        score += 35
    if len(keywords) >= 5:
        score += 35
    return clamp_score(score)


def analyze_playlists(playlists: Sequence[PlaylistRecord]) -> CategoryScore:
    if not playlists:
        return CategoryScore(
            name=PLAYLIST_STRUCTURE,
            score=NO_PLAYLIST_SCORE,
            subscores={},
            recommendations=(
                recommend(
                    Severity.HIGH, PLAYLIST_STRUCTURE,
                    CREATE_PLAYLISTS_ACTION,
                    "Playlists drive binge sessions and longer watch time",
                    "1-2 hours",
                ),
            ),
            details={"playlistCount": 0},
        )

    counts = [playlist.item_count for playlist in playlists]
    avg_items = mean(counts)
    longest = max(counts)
    tier = binge_tier(longest, avg_items)

    subscores = {
        "organization": organization_score(len(playlists), avg_items),
        "bingePotential": BINGE_TIERS[tier],
        "thematicGrouping": thematic_score(playlists),
    }
    score = clamp_score(weighted_score(PLAYLIST_STRUCTURE, subscores))

    recommendations = []
    if len(playlists) < 5:
        recommendations.append(recommend(
            Severity.MEDIUM, PLAYLIST_STRUCTURE,
            f"Grow from {len(playlists)} to 5+ topic playlists",
            "More ways for viewers to keep watching",
            "1 hour",
        ))
    if tier == "Low":
        recommendations.append(recommend(
            Severity.MEDIUM, PLAYLIST_STRUCTURE,
            "Build at least one series playlist with 10+ videos",
            "Longer autoplay chains and session time",
            "30 minutes",
        ))
    if subscores["thematicGrouping"] < 65:
        recommendations.append(recommend(
            Severity.LOW, PLAYLIST_STRUCTURE,
            "Give playlists descriptive, keyword-rich titles",
            "Playlists can rank in search on their own",
            "15 minutes",
        ))

    return CategoryScore(
        name=PLAYLIST_STRUCTURE,
        score=score,
        subscores=subscores,
        recommendations=tuple(recommendations),
        details={
            "playlistCount": len(playlists),
            "averageItemsPerPlaylist": avg_items,
            "longestPlaylist": longest,
            "bingePotential": tier,
            "playlists": [{"title": playlist.title, "itemCount": playlist.item_count} for playlist in playlists],
        },
    )
