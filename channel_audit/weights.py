"""Canonical category names and the fixed weights of each composite score."""

BRANDING = "Branding"
CONTENT_STRATEGY = "Content Strategy"
SEO = "SEO"
ENGAGEMENT = "Engagement"
CONTENT_QUALITY = "Content Quality"
PLAYLIST_STRUCTURE = "Playlist Structure"
TRANSCRIPT = "Transcript"

# Report and recommendation-merge order
CATEGORY_ORDER = (
    BRANDING,
    CONTENT_STRATEGY,
    SEO,
    ENGAGEMENT,
    CONTENT_QUALITY,
    PLAYLIST_STRUCTURE,
    TRANSCRIPT,
)

CATEGORY_WEIGHTS = {
    BRANDING: {
        "channelName": 0.25,
        "visualIdentity": 0.25,
        "aboutSection": 0.50,
    },
    CONTENT_STRATEGY: {
        "uploadConsistency": 0.30,
        "themeClarity": 0.25,
        "formatDiversity": 0.25,
        "audienceClarity": 0.20,
    },
    SEO: {
        "titles": 0.3,
        "descriptions": 0.3,
        "tags": 0.2,
        "thumbnails": 0.2,
    },
    ENGAGEMENT: {
        "viewsToSubscribers": 0.3,
        "likeRatio": 0.25,
        "commentQuality": 0.25,
        "engagementConsistency": 0.2,
    },
    CONTENT_QUALITY: {
        "hooks": 0.3,
        "structure": 0.25,
        "callsToAction": 0.25,
        "professionalQuality": 0.2,
    },
    PLAYLIST_STRUCTURE: {
        "organization": 0.4,
        "bingePotential": 0.35,
        "thematicGrouping": 0.25,
    },
}

NO_PLAYLIST_SCORE = 15.0

GRADE_BANDS = (
    (90, "Excellent"),
    (80, "Very Good"),
    (70, "Good"),
    (60, "Fair"),
    (50, "Needs Improvement"),
)
LOWEST_GRADE = "Poor"


def weighted_score(category: str, subscores: dict) -> float:
    """Blend a category's subscores with its fixed weights."""
    weights = CATEGORY_WEIGHTS[category]
    return sum(subscores[name] * weight for name, weight in weights.items())
