import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from datetime import datetime, timedelta
from pathlib import Path
from unittest.mock import patch

from channel_audit.analyzers.seo import analyze_seo
from channel_audit.engine import AnalysisConfig, analyze_channel
from channel_audit.loader import load_bundle
from channel_audit.models import Severity
from channel_audit.weights import CATEGORY_ORDER, CONTENT_STRATEGY, SEO, TRANSCRIPT
from tools.youtube_analyze_videos import analyze_file

START = datetime(2025, 1, 1, 12, 0, 0)


def _video(video_id, title, published_at, description="My day today", tags=None, duration="PT6M",
           views=1000, likes=30, comments=4, thumbnails=None):
    return {
        "id": video_id,
        "title": title,
        "description": description,
        "publishedAt": published_at.strftime("%Y-%m-%dT%H:%M:%SZ"),
        "tags": tags or [],
        "categoryId": "22",
        "thumbnails": thumbnails if thumbnails is not None else {"default": {"url": "d"}},
        "duration": duration,
        "statistics": {"viewCount": views, "likeCount": likes, "commentCount": comments},
    }


def _raw_data(videos, playlists=None, transcripts=None, subscribers=1000):
    return {
        "channel": {
            "id": "UC_TEST",
            "title": "Test Channel",
            "description": "",
            "publishedAt": "2020-01-01T00:00:00Z",
            "thumbnails": {},
            "subscriberCount": subscribers,
            "videoCount": len(videos),
            "viewCount": 100000,
        },
        "videos": videos,
        "playlists": playlists or [],
        "transcripts": transcripts or {},
    }


def _analyze(raw_data, config=None):
    with redirect_stdout(io.StringIO()):
        return analyze_channel(load_bundle(raw_data), config, generated_at=datetime(2025, 6, 1))


class UntaggedChannelTests(unittest.TestCase):
    def setUp(self):
        videos = [
            _video(f"v{i}", f"Vlog {i}", START + timedelta(days=3 * i))
            for i in range(1, 6)
        ]
        self.report = _analyze(_raw_data(videos))

    def test_seo_score_is_low(self):
        self.assertLess(self.report.category(SEO).score, 30)

    def test_critical_tag_insight(self):
        critical = [i for i in self.report.insights if i.severity == Severity.CRITICAL]
        self.assertEqual(len(critical), 1)
        self.assertIn("5 out of 5 videos", critical[0].finding)
        self.assertIn(critical[0], self.report.category(SEO).insights)

    def test_recommendations_led_by_critical_tag_entry(self):
        first = self.report.recommendations[0]
        self.assertEqual(first.priority, Severity.CRITICAL)
        self.assertEqual(first.category, SEO)
        self.assertIn("Tag", first.action)
        self.assertLessEqual(len(self.report.recommendations), 10)

    def test_every_category_present_and_bounded(self):
        self.assertEqual(list(self.report.categories), list(CATEGORY_ORDER))
        for category in self.report.categories.values():
            self.assertGreaterEqual(category.score, 0)
            self.assertLessEqual(category.score, 100)

    def test_transcripts_excluded_from_overall(self):
        scores = [c.score for name, c in self.report.categories.items() if name != TRANSCRIPT]
        self.assertAlmostEqual(self.report.overall_score, sum(scores) / len(scores))
        findings = [i.finding for i in self.report.category(TRANSCRIPT).insights]
        self.assertIn("Transcripts unavailable", findings)

    def test_report_serializes_to_json(self):
        data = json.loads(json.dumps(self.report.to_dict()))
        self.assertEqual(data["channel"]["name"], "Test Channel")
        self.assertEqual(data["generatedAt"], "2025-06-01T00:00:00")
        self.assertEqual(data["coverage"]["confidence"], "Low")
        self.assertEqual(len(data["videos"]), 5)


class WeeklyChannelTests(unittest.TestCase):
    def test_weekly_uploads(self):
        videos = [_video(f"v{i}", f"Episode {i}", START + timedelta(days=7 * i)) for i in range(20)]
        report = _analyze(_raw_data(videos))
        upload = report.category(CONTENT_STRATEGY).details["uploadPattern"]
        self.assertAlmostEqual(upload["consistencyScore"], 100.0, places=3)
        self.assertEqual(upload["frequency"], "Weekly")
        self.assertEqual(report.coverage.confidence, "High")


class SparseInputTests(unittest.TestCase):
    def test_no_videos(self):
        report = _analyze(_raw_data([]))
        self.assertEqual(report.coverage.ratio, 0.0)
        self.assertGreaterEqual(len(report.recommendations), 1)

    def test_zero_subscribers(self):
        report = _analyze(_raw_data([_video("v1", "Solo", START)], subscribers=0))
        self.assertEqual(report.category("Engagement").details["viewsToSubscribersRatio"], 0.0)

    def test_recommendation_cap_from_config(self):
        videos = [_video(f"v{i}", f"Vlog {i}", START + timedelta(days=40 * i)) for i in range(5)]
        report = _analyze(_raw_data(videos), AnalysisConfig(recommendation_cap=3))
        self.assertEqual(len(report.recommendations), 3)


class TranscriptChannelTests(unittest.TestCase):
    def test_transcripts_join_overall_score(self):
        videos = [_video("v1", "Deep dive", START, duration="PT10M")]
        transcripts = {
            "v1": {
                "sentences": [{"timestamp": "0:00", "text": "Why does nobody talk about this?"}],
                "fullText": "subscribe " + "word " * 1499,
            },
        }
        report = _analyze(_raw_data(videos, transcripts=transcripts))
        self.assertEqual(report.coverage.transcripts_analyzed, 1)
        self.assertAlmostEqual(report.category(TRANSCRIPT).score, 100.0)
        scores = [c.score for c in report.categories.values()]
        self.assertAlmostEqual(report.overall_score, sum(scores) / len(scores))


class ProgressOutputTests(unittest.TestCase):
    def test_each_step_announced_before_it_runs(self):
        def marked_seo(videos):
            print("SEO RAN")
            return analyze_seo(videos)

        output = io.StringIO()
        with patch("channel_audit.engine.analyze_seo", side_effect=marked_seo), redirect_stdout(output):
            analyze_channel(load_bundle(_raw_data([_video("v1", "Solo", START)])))
        text = output.getvalue()

        self.assertLess(text.index("Analyzing SEO"), text.index("SEO RAN"))
        self.assertLess(text.index("SEO RAN"), text.index("Analyzing engagement"))


class AnalyzeFileTests(unittest.TestCase):
    def test_writes_analysis_next_to_raw_data(self):
        videos = [_video("v1", "Vlog 1", START)]
        with tempfile.TemporaryDirectory() as tmpdir:
            raw_path = Path(tmpdir) / "raw_data.json"
            raw_path.write_text(json.dumps(_raw_data(videos)), encoding="utf-8")
            with redirect_stdout(io.StringIO()):
                report, output_file = analyze_file(raw_path)
            self.assertEqual(output_file, Path(tmpdir) / "analysis.json")
            saved = json.loads(output_file.read_text(encoding="utf-8"))
        self.assertEqual(saved["overallScore"], report.to_dict()["overallScore"])


if __name__ == "__main__":
    unittest.main()
