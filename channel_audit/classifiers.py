"""
Keyword and regex heuristics used across the audit.

Every check is a named function so it can be tested on its own. All matching
is case-insensitive substring or regex matching; nothing here tries to
understand language.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence

POWER_WORDS = ("ultimate", "complete", "best", "guide", "tutorial", "how to", "tips", "secrets")
HOOK_WORDS = ("ultimate", "secret", "best", "worst", "amazing", "shocking", "insane", "never", "mistakes")
QUESTION_WORDS = ("how", "what", "why", "when", "where", "which", "who")
URGENCY_WORDS = ("now", "today", "before", "stop", "finally", "last chance", "urgent", "right now")
HOOK_PHRASES = ("in this video", "today we")
EXPLAINER_PHRASES = ("how to", "what is")
CTA_KEYWORDS = ("subscribe", "like", "comment", "share", "bell")
SOCIAL_KEYWORDS = ("twitter", "instagram")
SOCIAL_PLATFORMS = ("twitter", "instagram", "tiktok", "linkedin", "facebook")

AUDIENCE_KEYWORDS = {
    "beginner": ("beginner", "basics", "introduction", "intro", "getting started", "first time", "easy", "simple", "101"),
    "intermediate": ("intermediate", "improve", "next level", "tips", "tricks", "techniques", "practice"),
    "advanced": ("advanced", "expert", "deep dive", "master", "in-depth", "pro tips", "optimization"),
    "professional": ("professional", "business", "career", "industry", "enterprise", "client", "workflow"),
}

TIMESTAMP_PATTERN = re.compile(r"\d+:\d+")
DIGIT_PATTERN = re.compile(r"\d")
LINK_PATTERN = re.compile(r"https?://", re.IGNORECASE)
WEBSITE_PATTERN = re.compile(r"https?://[^\s]+\.(com|org|net|io|dev)", re.IGNORECASE)
WORD_PATTERN = re.compile(r"[^\w\s]")


def _lower(text: Optional[str]) -> str:
    return (text or "").lower()


def contains_any(text: Optional[str], keywords: Iterable[str]) -> bool:
    lowered = _lower(text)
    return any(keyword in lowered for keyword in keywords)


def count_matches(text: Optional[str], keywords: Iterable[str]) -> int:
    """Total occurrences of every keyword in the text."""
    lowered = _lower(text)
    return sum(lowered.count(keyword) for keyword in keywords)


def has_digit(text: Optional[str]) -> bool:
    return bool(DIGIT_PATTERN.search(text or ""))


def has_power_word(title: Optional[str]) -> bool:
    return contains_any(title, POWER_WORDS)


def is_explainer_title(title: Optional[str]) -> bool:
    return contains_any(title, EXPLAINER_PHRASES)


def has_hook_word(text: Optional[str]) -> bool:
    return contains_any(text, HOOK_WORDS)


def starts_with_question_word(text: Optional[str]) -> bool:
    lowered = _lower(text).strip()
    return any(lowered.startswith(word) for word in QUESTION_WORDS)


def has_urgency_word(text: Optional[str]) -> bool:
    lowered = _lower(text)
    return any(re.search(rf"\b{re.escape(word)}\b", lowered) for word in URGENCY_WORDS)


def has_timestamp_pattern(text: Optional[str]) -> bool:
    return bool(TIMESTAMP_PATTERN.search(text or ""))


def has_timestamps(description: Optional[str]) -> bool:
    """Chapter markers: a mm:ss pattern in a multi-line description."""
    return has_timestamp_pattern(description) and "\n" in (description or "")


def has_call_to_action(text: Optional[str]) -> bool:
    return contains_any(text, CTA_KEYWORDS)


def has_links(text: Optional[str]) -> bool:
    return bool(LINK_PATTERN.search(text or ""))


def has_social_keyword(text: Optional[str]) -> bool:
    return contains_any(text, SOCIAL_KEYWORDS)


def has_website_link(text: Optional[str]) -> bool:
    return bool(WEBSITE_PATTERN.search(text or ""))


def has_social_links(text: Optional[str]) -> bool:
    return contains_any(text, SOCIAL_PLATFORMS)


def has_hook(title: Optional[str], description: Optional[str]) -> bool:
    return has_hook_word(title) or contains_any(description, HOOK_PHRASES)


def hook_strength(text: Optional[str]) -> int:
    """Additive curiosity score for one title, capped at 100."""
    score = 0
    if has_hook_word(text):
        score += 30
    if starts_with_question_word(text):
        score += 25
    if has_urgency_word(text):
        score += 20
    if "?" in (text or "") or "!" in (text or ""):
        score += 15
    if has_digit(text):
        score += 10
    return min(score, 100)


def keyword_tokens(text: Optional[str], min_length: int = 4) -> list:
    """Lowercased words stripped of punctuation, keeping those of min_length+."""
    cleaned = WORD_PATTERN.sub("", _lower(text))
    return [word for word in cleaned.split() if len(word) >= min_length]


def audience_match_counts(corpus: str, keyword_sets: Optional[dict] = None) -> dict:
    keyword_sets = keyword_sets or AUDIENCE_KEYWORDS
    return {name: count_matches(corpus, words) for name, words in keyword_sets.items()}


def first_sentence_hook(sentences: Sequence, window_seconds: float = 30.0) -> bool:
    """True if any transcript sentence inside the opening window carries a hook cue."""
    for sentence in sentences:
        if sentence.timestamp_seconds > window_seconds:
            break
        text = sentence.text
        if has_hook_word(text) or starts_with_question_word(text) or has_urgency_word(text) or "?" in text:
            return True
    return False
