import tempfile
import unittest
from dataclasses import replace
from pathlib import Path

from pipeline.config import AppConfig
from pipeline.runner import (
    extract_summary_metrics,
    normalize_channel_url,
    run_audit_pipeline,
    validate_channel_url,
)
from tools.youtube_fetch_channel_data import YouTubeChannelFetcher

CHANNEL_INFO = {
    "id": "UC_RUNNER",
    "title": "Runner Channel",
    "description": "Tutorials about woodworking for beginners.",
    "publishedAt": "2019-05-01T00:00:00Z",
    "thumbnails": {},
    "subscriberCount": 2000,
    "videoCount": 3,
    "viewCount": 40000,
    "uploadsPlaylistId": "UU_RUNNER",
}

VIDEOS = [
    {
        "id": f"v{i}",
        "title": f"Woodworking Basics Part {i}: Cutting Joints",
        "description": "0:00 Intro\nSubscribe for more",
        "publishedAt": f"2025-0{i}-01T10:00:00Z",
        "tags": ["woodworking", "tutorial"],
        "thumbnails": {"high": {"url": "h"}},
        "duration": "PT12M",
        "statistics": {"viewCount": 1000 * i, "likeCount": 40 * i, "commentCount": 5},
    }
    for i in range(1, 4)
]


class FakeFetcher(YouTubeChannelFetcher):
    def __init__(self, fail_with=None):
        super().__init__("unused", client=object())
        self.fail_with = fail_with
        self.quota_used = 7

    def extract_channel_id(self, url):
        if self.fail_with:
            raise self.fail_with
        return CHANNEL_INFO["id"]

    def fetch_channel_info(self, channel_id):
        return dict(CHANNEL_INFO)

    def fetch_channel_videos(self, uploads_playlist_id, max_videos=0):
        return list(VIDEOS)

    def fetch_playlists(self, channel_id):
        return [{"id": "PL1", "title": "Joinery", "itemCount": 3}]


class RecordingSheets:
    def __init__(self, fail=False):
        self.fail = fail
        self.errors = []
        self.exports = []

    def export(self, analysis, sheet_id=None):
        self.exports.append((analysis, sheet_id))
        return f"https://docs.google.com/spreadsheets/d/{sheet_id}"

    def write_error_sheet(self, sheet_id, message, channel_url=""):
        if self.fail:
            raise RuntimeError("sheets offline")
        self.errors.append((sheet_id, message, channel_url))


def _config(output_folder, sheet_id=""):
    return AppConfig(
        youtube_api_key="",
        max_videos=0,
        output_folder=output_folder,
        google_sheet_id=sheet_id,
        google_credentials_path="credentials.json",
        google_token_path="token.json",
        recommendation_cap=10,
        transcript_sample_size=20,
        min_reliable_videos=10,
    )


class AuditRunnerTests(unittest.TestCase):
    def test_normalize_channel_url_forces_https(self):
        self.assertEqual(
            normalize_channel_url("http://youtube.com/@ChrisCappy/"),
            "https://youtube.com/@ChrisCappy",
        )

    def test_validate_channel_url(self):
        self.assertTrue(validate_channel_url("https://youtube.com/@channelname"))
        self.assertTrue(validate_channel_url("https://www.youtube.com/channel/UCabcdefghijk"))
        self.assertTrue(validate_channel_url("https://youtube.com/c/Name"))
        self.assertFalse(validate_channel_url("https://example.com/not-youtube"))

    def test_extract_summary_metrics(self):
        analysis = {
            "overallScore": 72.5,
            "overallGrade": "Very Good",
            "recommendations": [
                {"priority": "Critical"},
                {"priority": "High"},
                {"priority": "Medium"},
                {"priority": "Medium"},
            ],
            "coverage": {"videosAnalyzed": 30},
        }
        metrics = extract_summary_metrics(analysis)
        self.assertEqual(metrics["overall_score"], 72.5)
        self.assertEqual(metrics["critical_priority"], 1)
        self.assertEqual(metrics["high_priority"], 1)
        self.assertEqual(metrics["medium_priority"], 2)
        self.assertEqual(metrics["low_priority"], 0)
        self.assertEqual(metrics["videos_analyzed"], 30)


class RunPipelineTests(unittest.TestCase):
    def test_full_run_writes_every_artifact(self):
        lines = []
        sheets = RecordingSheets()
        with tempfile.TemporaryDirectory() as tmpdir:
            config = _config(tmpdir, sheet_id="SHEET123")
            result = run_audit_pipeline(
                "http://youtube.com/@runner/", config, logger=lines.append,
                fetcher=FakeFetcher(), sheets_exporter=sheets,
            )

            self.assertEqual(result["channel_id"], "UC_RUNNER")
            self.assertEqual(result["channel_name"], "Runner Channel")
            self.assertEqual(result["quota_used"], 7)
            for key in ("raw_data_path", "analysis_path", "excel_path", "markdown_path"):
                self.assertTrue(Path(result[key]).exists(), key)
            self.assertEqual(Path(result["raw_data_path"]).parent, Path(tmpdir) / "UC_RUNNER")
            self.assertIn("# YouTube Channel Audit Report", Path(result["markdown_path"]).read_text(encoding="utf-8"))

        self.assertEqual(result["sheet_url"], "https://docs.google.com/spreadsheets/d/SHEET123")
        self.assertEqual(len(sheets.exports), 1)
        self.assertEqual(result["summary"]["videos_analyzed"], 3)
        self.assertIn("[Analyze Videos] complete", lines)

    def test_invalid_url_rejected(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(ValueError):
                run_audit_pipeline("https://example.com/x", _config(tmpdir), fetcher=FakeFetcher())

    def test_missing_api_key_without_fetcher(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(ValueError):
                run_audit_pipeline("https://youtube.com/@runner", _config(tmpdir))

    def test_failure_is_recorded_in_sheet_and_reraised(self):
        sheets = RecordingSheets()
        with tempfile.TemporaryDirectory() as tmpdir:
            config = _config(tmpdir, sheet_id="SHEET123")
            with self.assertRaises(RuntimeError):
                run_audit_pipeline(
                    "https://youtube.com/@runner", config,
                    fetcher=FakeFetcher(fail_with=RuntimeError("quota exceeded")), sheets_exporter=sheets,
                )
        self.assertEqual(sheets.errors, [("SHEET123", "quota exceeded", "https://youtube.com/@runner")])

    def test_error_sheet_failure_keeps_original_error(self):
        lines = []
        with tempfile.TemporaryDirectory() as tmpdir:
            config = replace(_config(tmpdir), google_sheet_id="SHEET123")
            with self.assertRaises(RuntimeError) as ctx:
                run_audit_pipeline(
                    "https://youtube.com/@runner", config, logger=lines.append,
                    fetcher=FakeFetcher(fail_with=RuntimeError("quota exceeded")),
                    sheets_exporter=RecordingSheets(fail=True),
                )
        self.assertEqual(str(ctx.exception), "quota exceeded")
        self.assertTrue(any("Could not write error sheet" in line for line in lines))


if __name__ == "__main__":
    unittest.main()
