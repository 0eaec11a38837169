import unittest
from datetime import datetime, timedelta

from channel_audit.analyzers.branding import analyze_branding
from channel_audit.analyzers.content_quality import analyze_content_quality
from channel_audit.analyzers.content_strategy import (
    analyze_audience,
    analyze_format_diversity,
    analyze_themes,
    analyze_upload_pattern,
    frequency_label,
)
from channel_audit.analyzers.engagement import analyze_engagement, views_to_subscribers_ratio
from channel_audit.analyzers.playlists import CREATE_PLAYLISTS_ACTION, analyze_playlists
from channel_audit.analyzers.seo import analyze_seo
from channel_audit.analyzers.transcript import analyze_transcripts
from channel_audit.metrics import extract_video_metrics
from channel_audit.models import (
    ChannelRecord,
    PlaylistRecord,
    Severity,
    TranscriptRecord,
    TranscriptSentence,
    VideoRecord,
)

START = datetime(2025, 1, 1, 12, 0, 0)


def _metrics(video_id="v1", title="Video", description="", tags=(), published_at=START,
             duration="PT5M", views=1000, likes=30, comments=5, thumbnails=None):
    return extract_video_metrics(VideoRecord(
        id=video_id,
        title=title,
        description=description,
        tags=tuple(tags),
        published_at=published_at,
        iso_duration=duration,
        view_count=views,
        like_count=likes,
        comment_count=comments,
        thumbnails=thumbnails,
    ))


def _dated(gaps):
    """Videos published at START, then after each gap in days."""
    dates = [START]
    for gap in gaps:
        dates.append(dates[-1] + timedelta(days=gap))
    return [_metrics(video_id=f"v{i}", published_at=date) for i, date in enumerate(dates)]


def _channel(**overrides):
    values = dict(id="UC_TEST", name="Test Channel", subscriber_count=1000, video_count=10)
    values.update(overrides)
    return ChannelRecord(**values)


class UploadPatternTests(unittest.TestCase):
    def test_weekly_uploads_are_fully_consistent(self):
        pattern = analyze_upload_pattern(_dated([7] * 19))
        self.assertAlmostEqual(pattern["consistencyScore"], 100.0)
        self.assertAlmostEqual(pattern["averageDaysBetween"], 7.0)
        self.assertEqual(pattern["frequency"], "Weekly")

    def test_consistency_non_increasing_in_gap_spread(self):
        scores = [
            analyze_upload_pattern(_dated(gaps))["consistencyScore"]
            for gaps in ([7, 7, 7, 7], [5, 9, 6, 8], [2, 14, 3, 11], [1, 30, 1, 30])
        ]
        for earlier, later in zip(scores, scores[1:]):
            self.assertGreaterEqual(earlier, later)

    def test_single_video_defaults(self):
        pattern = analyze_upload_pattern(_dated([]))
        self.assertEqual(pattern["averageDaysBetween"], 7.0)
        self.assertEqual(pattern["consistencyScore"], 100.0)

    def test_widest_gap_is_reported(self):
        pattern = analyze_upload_pattern(_dated([7, 40, 7]))
        self.assertAlmostEqual(pattern["longestGapDays"], 40.0)
        self.assertEqual(pattern["longestGapAfter"], "Video")

    def test_frequency_labels(self):
        self.assertEqual(frequency_label(1), "Daily")
        self.assertEqual(frequency_label(3), "Every 2-3 days")
        self.assertEqual(frequency_label(8), "Weekly")
        self.assertEqual(frequency_label(14), "Bi-weekly")
        self.assertEqual(frequency_label(30), "Irregular")


class ThemeAndFormatTests(unittest.TestCase):
    def test_tag_themes_ranked_by_frequency_then_first_seen(self):
        videos = [
            _metrics(video_id="a", tags=["python", "django", "api"]),
            _metrics(video_id="b", tags=["python", "django", "api"]),
            _metrics(video_id="c", tags=["python"]),
        ]
        themes = analyze_themes(videos)
        self.assertEqual([t["theme"] for t in themes["primaryThemes"]], ["python", "django", "api"])
        self.assertEqual(themes["clarityScore"], 85.0)
        self.assertAlmostEqual(themes["themeConsistency"], 3 / 7 * 100)

    def test_title_tokens_used_without_tags(self):
        videos = [_metrics(video_id="a", title="Garden tour"), _metrics(video_id="b", title="Garden update")]
        themes = analyze_themes(videos)
        self.assertEqual(themes["themeSource"], "titles")
        self.assertEqual(themes["primaryThemes"][0]["theme"], "garden")
        self.assertEqual(themes["clarityScore"], 60.0)

    def test_no_recurring_themes(self):
        self.assertEqual(analyze_themes([_metrics(title="One")])["clarityScore"], 30.0)

    def test_format_diversity(self):
        videos = [_metrics(duration=d) for d in ("PT30S", "PT5M", "PT20M", "PT1H10M")]
        self.assertEqual(analyze_format_diversity(videos)["diversityScore"], 100.0)
        self.assertEqual(analyze_format_diversity(videos[:1])["diversityScore"], 25.0)

    def test_audience_clarity(self):
        description = "beginner " * 6
        audience = analyze_audience([_metrics(description=description)])
        self.assertEqual(audience["primaryAudience"], "beginner")
        self.assertEqual(audience["clarityScore"], 55.0)
        self.assertEqual(analyze_audience([_metrics()])["primaryAudience"], "Mixed")

    def test_primary_audience_is_the_largest_set(self):
        video = _metrics(title="beginner " * 6, description="advanced " * 20)
        audience = analyze_audience([video])
        self.assertEqual(audience["matchCounts"]["beginner"], 6)
        self.assertEqual(audience["matchCounts"]["advanced"], 20)
        self.assertEqual(audience["primaryAudience"], "advanced")
        self.assertEqual(audience["clarityScore"], 70.0)

    def test_primary_audience_tie_keeps_set_order(self):
        video = _metrics(title="advanced " * 6, description="beginner " * 6)
        self.assertEqual(analyze_audience([video])["primaryAudience"], "beginner")


class EngagementTests(unittest.TestCase):
    def test_zero_subscribers_gives_zero_ratio(self):
        self.assertEqual(views_to_subscribers_ratio(5000, 0), 0.0)
        category = analyze_engagement(_channel(subscriber_count=0), [_metrics()])
        self.assertEqual(category.subscores["viewsToSubscribers"], 0.0)
        self.assertEqual(category.details["viewsToSubscribersRatio"], 0.0)

    def test_subscores(self):
        videos = [_metrics(views=100, likes=4, comments=2)]
        category = analyze_engagement(_channel(subscriber_count=1000), videos)
        self.assertAlmostEqual(category.subscores["viewsToSubscribers"], 100.0)
        self.assertAlmostEqual(category.subscores["likeRatio"], 100.0)
        self.assertAlmostEqual(category.subscores["commentQuality"], 100.0)
        self.assertAlmostEqual(category.subscores["engagementConsistency"], 100.0)
        self.assertEqual(category.details["benchmarks"]["viewsToSubscribers"], "Good")

    def test_empty_videos_do_not_raise(self):
        category = analyze_engagement(_channel(), [])
        self.assertGreaterEqual(category.score, 0)


class PlaylistTests(unittest.TestCase):
    def test_zero_playlists(self):
        category = analyze_playlists([])
        self.assertEqual(category.score, 15.0)
        self.assertEqual(len(category.recommendations), 1)
        self.assertEqual(category.recommendations[0].priority, Severity.HIGH)
        self.assertEqual(category.recommendations[0].action, CREATE_PLAYLISTS_ACTION)

    def test_well_organized_playlists(self):
        titles = ["Python Basics", "Django Projects", "Docker Deployment", "Testing Patterns",
                  "Career Advice", "Interview Prep", "Database Design", "Frontend Tricks"]
        playlists = [PlaylistRecord(id=str(i), title=title, item_count=25) for i, title in enumerate(titles)]
        category = analyze_playlists(playlists)
        self.assertEqual(category.subscores["organization"], 100.0)
        self.assertEqual(category.subscores["bingePotential"], 90.0)
        self.assertEqual(category.subscores["thematicGrouping"], 100.0)
        self.assertAlmostEqual(category.score, 96.5)

    def test_small_playlists_have_low_binge_potential(self):
        category = analyze_playlists([PlaylistRecord(id="p", title="Misc", item_count=3)])
        self.assertEqual(category.details["bingePotential"], "Low")
        self.assertEqual(category.subscores["organization"], 20.0)


class TranscriptTests(unittest.TestCase):
    def _transcript(self, video_id):
        return TranscriptRecord(
            video_id=video_id,
            sentences=(TranscriptSentence(0.0, "Why does nobody talk about this?"),),
            full_text="subscribe " + "word " * 1499,
        )

    def test_no_transcripts(self):
        category = analyze_transcripts([_metrics()], {})
        self.assertEqual(category.score, 0.0)
        self.assertEqual(category.details["transcriptsAnalyzed"], 0)

    def test_strong_transcript(self):
        video = _metrics(video_id="v1", duration="PT10M")
        category = analyze_transcripts([video], {"v1": self._transcript("v1")})
        self.assertEqual(category.details["transcriptsAnalyzed"], 1)
        self.assertAlmostEqual(category.score, 100.0)

    def test_sample_size_limits_scored_videos(self):
        videos = [_metrics(video_id=f"v{i}", duration="PT10M") for i in range(3)]
        transcripts = {f"v{i}": self._transcript(f"v{i}") for i in range(3)}
        transcripts["v0"] = None
        category = analyze_transcripts(videos, transcripts, sample_size=1)
        self.assertEqual(category.details["transcriptsAnalyzed"], 1)
        self.assertEqual(category.details["videos"][0]["videoId"], "v1")


class SeoAndQualityTests(unittest.TestCase):
    def test_untagged_videos_get_critical_tag_recommendation(self):
        category = analyze_seo([_metrics(video_id=f"v{i}", title="Vlog 1", description="My day") for i in range(5)])
        self.assertLess(category.score, 30)
        self.assertEqual(category.recommendations[0].priority, Severity.CRITICAL)
        self.assertIn("Tag", category.recommendations[0].action)
        self.assertEqual(category.details["videosWithoutTags"], 5)

    def test_content_quality_subscores(self):
        description = "0:00 Intro\n2:00 Main part\nSubscribe https://example.com"
        videos = [
            _metrics(video_id="a", title="Why this is the best setup ever?", description=description,
                     thumbnails={"high": {"url": "h"}, "maxres": {"url": "m"}}),
            _metrics(video_id="b", title="Plain", description="text"),
        ]
        category = analyze_content_quality(videos)
        self.assertAlmostEqual(category.subscores["structure"], 0.7 * 50 + 0.3 * 50)
        self.assertAlmostEqual(category.subscores["callsToAction"], 50.0)
        self.assertEqual(category.details["weakHooks"], 1)


class BrandingTests(unittest.TestCase):
    def test_bare_channel_gets_about_and_banner_recommendations(self):
        category = analyze_branding(_channel(description=""), [])
        priorities = {rec.action.split(" ")[0]: rec.priority for rec in category.recommendations}
        self.assertEqual(category.subscores["aboutSection"], 0.0)
        self.assertEqual(priorities["Rewrite"], Severity.HIGH)
        self.assertEqual(priorities["Upload"], Severity.MEDIUM)

    def test_complete_about_section(self):
        description = ("We teach Python. " * 70) + " https://example.com twitter instagram"
        channel = _channel(description=description, custom_url="@test", country="US",
                           banner_url="https://img/banner", thumbnails={"high": {"url": "x"}})
        category = analyze_branding(channel, [])
        self.assertEqual(category.subscores["aboutSection"], 100.0)
        self.assertTrue(category.details["hasBanner"])


if __name__ == "__main__":
    unittest.main()
