import unittest

from channel_audit.insights import (
    attach_insights,
    generate_insights,
    irregular_uploads,
    missing_tags,
    short_titles,
    transcripts_unavailable,
)
from channel_audit.models import CategoryScore, Insight, Severity
from channel_audit.statistics import ChannelStatistics
from channel_audit.weights import ENGAGEMENT, SEO


def _stats(**overrides):
    """A healthy channel: no rule fires on these values."""
    values = dict(
        total_videos=20,
        no_tag_count=0,
        first_untagged_title=None,
        avg_title_length=45.0,
        shortest_title="A reasonably descriptive title",
        long_title_count=0,
        longest_title=None,
        avg_description_length=450.0,
        shortest_description_title="Some video",
        timestamps_pct=80.0,
        cta_pct=90.0,
        avg_engagement_rate=5.0,
        engagement_std=1.0,
        views_to_subs_ratio=20.0,
        subscriber_count=10000,
        upload_consistency=95.0,
        avg_gap_days=7.0,
        longest_gap_days=9.0,
        longest_gap_after="Some video",
        upload_frequency="Weekly",
        dated_videos=20,
        formats_used=3,
        weak_hook_count=2,
        weakest_hook_title="Some video",
        playlist_count=8,
        about_section_score=80.0,
        channel_description_length=800,
        has_banner=True,
        high_res_thumbnail_pct=100.0,
        transcripts_analyzed=5,
    )
    values.update(overrides)
    return ChannelStatistics(**values)


class InsightRuleTests(unittest.TestCase):
    def test_healthy_channel_has_no_insights(self):
        self.assertEqual(generate_insights(_stats()), ())

    def test_missing_tags_is_critical_above_ten_percent(self):
        insight = missing_tags(_stats(total_videos=5, no_tag_count=5, first_untagged_title="Vlog 1"))
        self.assertEqual(insight.severity, Severity.CRITICAL)
        self.assertIn("5 out of 5 videos", insight.finding)
        self.assertIn("Vlog 1", insight.example)

    def test_missing_tags_below_threshold_is_medium(self):
        insight = missing_tags(_stats(total_videos=20, no_tag_count=1, first_untagged_title="x"))
        self.assertEqual(insight.severity, Severity.MEDIUM)

    def test_short_titles_cite_shortest(self):
        insight = short_titles(_stats(avg_title_length=12.0, shortest_title="Vlog 1"))
        self.assertEqual(insight.severity, Severity.HIGH)
        self.assertIn("12", insight.finding)
        self.assertIn("Vlog 1", insight.example)

    def test_irregular_uploads_cite_widest_gap(self):
        insight = irregular_uploads(_stats(upload_consistency=20.0, longest_gap_days=60.0, longest_gap_after="Old video"))
        self.assertEqual(insight.severity, Severity.HIGH)
        self.assertIn("60 days", insight.example)
        self.assertIn("Old video", insight.example)

    def test_transcripts_unavailable(self):
        insight = transcripts_unavailable(_stats(transcripts_analyzed=0))
        self.assertEqual(insight.finding, "Transcripts unavailable")
        self.assertEqual(insight.severity, Severity.LOW)

    def test_rules_keep_declared_order(self):
        insights = generate_insights(_stats(no_tag_count=10, first_untagged_title="x", avg_engagement_rate=0.5))
        categories = [insight.category for insight in insights]
        self.assertEqual(categories, [SEO, ENGAGEMENT])

    def test_empty_channel_does_not_raise(self):
        insights = generate_insights(_stats(total_videos=0, dated_videos=0, playlist_count=0, transcripts_analyzed=0))
        self.assertTrue(all(isinstance(insight, Insight) for insight in insights))


class AttachInsightsTests(unittest.TestCase):
    def test_builds_new_category_values(self):
        categories = {
            SEO: CategoryScore(name=SEO, score=40.0),
            ENGAGEMENT: CategoryScore(name=ENGAGEMENT, score=70.0),
        }
        insight = missing_tags(_stats(total_videos=5, no_tag_count=5, first_untagged_title="x"))

        attached = attach_insights(categories, (insight,))

        self.assertEqual(attached[SEO].insights, (insight,))
        self.assertEqual(attached[ENGAGEMENT].insights, ())
        self.assertEqual(categories[SEO].insights, ())
        self.assertIsNot(attached[SEO], categories[SEO])


if __name__ == "__main__":
    unittest.main()
