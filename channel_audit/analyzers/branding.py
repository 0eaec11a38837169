"""Branding & identity: channel name, visual identity and About section."""

from __future__ import annotations

import re
from collections import Counter
from typing import Sequence

from channel_audit import classifiers
from channel_audit.analyzers.common import mean, recommend
from channel_audit.models import CategoryScore, ChannelRecord, Severity, VideoMetrics
from channel_audit.parsing import clamp_score
from channel_audit.weights import BRANDING, weighted_score


def name_clarity(name: str) -> float:
    name = name.strip()
    score = 50
    if 3 <= len(name) <= 20:
        score += 25
    if len(name.split()) <= 3:
        score += 15
    if re.fullmatch(r"[A-Za-z ]+", name):
        score += 10
    return clamp_score(score) if name else 0.0


def name_memorability(name: str) -> float:
    name = name.strip()
    if not name:
        return 0.0
    score = 40
    if not classifiers.has_digit(name):
        score += 30
    if not re.search(r"[_.\-]", name):
        score += 20
    if len(name) <= 15:
        score += 10
    return clamp_score(score)


def channel_vocabulary(videos: Sequence[VideoMetrics]) -> Counter:
    words = Counter()
    for video in videos:
        for tag in video.tags:
            words.update(classifiers.keyword_tokens(tag, min_length=3))
        words.update(classifiers.keyword_tokens(video.title, min_length=3))
    return words


def niche_alignment(channel: ChannelRecord, videos: Sequence[VideoMetrics]) -> float:
    """How well the name and About text echo what the videos are about."""
    vocabulary = channel_vocabulary(videos)
    if not vocabulary:
        return 50.0

    score = 50
    name_tokens = classifiers.keyword_tokens(channel.name, min_length=3)
    if any(token in vocabulary for token in name_tokens):
        score += 30
    top_words = [word for word, _ in vocabulary.most_common(5)]
    if any(word in (channel.description or "").lower() for word in top_words):
        score += 20
    return clamp_score(score)


def about_section_score(channel: ChannelRecord) -> float:
    description = channel.description or ""
    length = len(description)
    score = 0
    if length >= 1000:
        score += 40
    elif length >= 300:
        score += 30
    elif length >= 100:
        score += 15
    if classifiers.has_website_link(description):
        score += 20
    if classifiers.has_social_links(description):
        score += 20
    if channel.custom_url:
        score += 10
    if channel.country:
        score += 10
    return clamp_score(score)


def analyze_branding(channel: ChannelRecord, videos: Sequence[VideoMetrics]) -> CategoryScore:
    clarity = name_clarity(channel.name)
    memorability = name_memorability(channel.name)
    alignment = niche_alignment(channel, videos)
    profile_image = 85.0 if (channel.thumbnails or {}).get("high") else 45.0
    banner = 80.0 if channel.banner_url else 30.0
    about = about_section_score(channel)

    subscores = {
        "channelName": mean([clarity, memorability, alignment]),
        "visualIdentity": mean([profile_image, banner]),
        "aboutSection": about,
    }
    score = clamp_score(weighted_score(BRANDING, subscores))

    recommendations = []
    if about < 50:
        recommendations.append(recommend(
            Severity.HIGH, BRANDING,
            "Rewrite the About section: 300+ characters with niche keywords, a website link and social links",
            "Clearer channel positioning on the channel page and in search",
            "30-60 minutes",
        ))
    if not channel.banner_url:
        recommendations.append(recommend(
            Severity.MEDIUM, BRANDING,
            "Upload a 2560x1440 channel banner that states the channel's niche and upload schedule",
            "Stronger first impression for channel visitors",
            "1-2 hours",
        ))
    if profile_image < 85:
        recommendations.append(recommend(
            Severity.MEDIUM, BRANDING,
            "Upload a high-resolution (800x800) profile image",
            "Recognizable channel icon across search, comments and subscriptions",
            "30 minutes",
        ))
    if alignment < 80:
        recommendations.append(recommend(
            Severity.LOW, BRANDING,
            "Echo the channel's main topic in its name, About section and video tags",
            "Consistent niche signals across the channel",
            "1 hour",
        ))

    return CategoryScore(
        name=BRANDING,
        score=score,
        subscores={
            **subscores,
            "nameClarity": clarity,
            "nameMemorability": memorability,
            "nicheAlignment": alignment,
            "profileImageQuality": profile_image,
            "bannerQuality": banner,
        },
        recommendations=tuple(recommendations),
        details={
            "channelName": channel.name,
            "nameLength": len(channel.name),
            "hasBanner": bool(channel.banner_url),
            "hasHighResProfileImage": profile_image >= 85,
            "descriptionLength": len(channel.description or ""),
            "hasWebsiteLinks": classifiers.has_website_link(channel.description),
            "hasSocialLinks": classifiers.has_social_links(channel.description),
            "hasCustomUrl": bool(channel.custom_url),
        },
    )
