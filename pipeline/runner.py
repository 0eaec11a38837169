"""Audit runner: fetch, analyze, save and render one channel."""

from __future__ import annotations

import io
import json
import re
from contextlib import redirect_stdout
from pathlib import Path
from typing import Callable, Dict, Optional

from channel_audit.engine import analyze_channel
from channel_audit.loader import load_bundle
from pipeline.config import AppConfig
from tools.export_to_excel import ExcelExporter
from tools.export_to_sheets import SheetsExporter
from tools.generate_markdown_report import MarkdownReportGenerator
from tools.youtube_fetch_channel_data import YouTubeChannelFetcher

YOUTUBE_CHANNEL_PATTERNS = [
    re.compile(r"^https://(www\.)?youtube\.com/@[\w.-]+/?$", re.IGNORECASE),
    re.compile(r"^https://(www\.)?youtube\.com/channel/UC[\w-]+/?$", re.IGNORECASE),
    re.compile(r"^https://(www\.)?youtube\.com/c/[\w-]+/?$", re.IGNORECASE),
    re.compile(r"^https://(www\.)?youtube\.com/user/[\w-]+/?$", re.IGNORECASE),
]

Logger = Optional[Callable[[str], None]]


def normalize_channel_url(channel_url: str) -> str:
    normalized = channel_url.strip()
    if normalized.startswith("http://"):
        normalized = "https://" + normalized[len("http://"):]
    return normalized.rstrip("/")


def validate_channel_url(channel_url: str) -> bool:
    normalized = normalize_channel_url(channel_url)
    return any(pattern.match(normalized) for pattern in YOUTUBE_CHANNEL_PATTERNS)


def _emit(logger: Logger, message: str) -> None:
    if logger:
        logger(message)


def _capture_step(logger: Logger, step_name: str, fn):
    _emit(logger, f"\n[{step_name}] starting...")
    buffer = io.StringIO()
    with redirect_stdout(buffer):
        result = fn()
    output = buffer.getvalue().strip()
    if output:
        _emit(logger, output)
    _emit(logger, f"[{step_name}] complete")
    return result


def extract_summary_metrics(analysis: Dict) -> Dict:
    recommendations = analysis.get("recommendations", [])

    def count(priority: str) -> int:
        return sum(1 for rec in recommendations if rec.get("priority") == priority)

    return {
        "overall_score": float(analysis.get("overallScore", 0)),
        "overall_grade": analysis.get("overallGrade", ""),
        "critical_priority": count("Critical"),
        "high_priority": count("High"),
        "medium_priority": count("Medium"),
        "low_priority": count("Low"),
        "videos_analyzed": int(analysis.get("coverage", {}).get("videosAnalyzed", 0)),
    }


def run_audit_pipeline(
    channel_url: str,
    config: AppConfig,
    logger: Logger = None,
    fetcher: Optional[YouTubeChannelFetcher] = None,
    sheets_exporter: Optional[SheetsExporter] = None,
) -> Dict:
    """Run the full audit and return paths/summary metadata.

    When a Google Sheet ID is configured and any step fails, the error is
    written to the sheet before the exception is re-raised.
    """
    if config.google_sheet_id and sheets_exporter is None:
        sheets_exporter = SheetsExporter(config.google_credentials_path, config.google_token_path)

    try:
        return _run(channel_url, config, logger, fetcher, sheets_exporter)
    except Exception as e:
        if config.google_sheet_id:
            _emit(logger, f"❌ Audit failed: {e}")
            try:
                sheets_exporter.write_error_sheet(config.google_sheet_id, str(e), channel_url)
                _emit(logger, "Error recorded in Google Sheet")
            except Exception as sheet_error:
                _emit(logger, f"⚠️ Could not write error sheet: {sheet_error}")
        raise


def _run(channel_url, config, logger, fetcher, sheets_exporter) -> Dict:
    if not config.youtube_api_key and fetcher is None:
        raise ValueError("YOUTUBE_API_KEY is missing")

    normalized_url = normalize_channel_url(channel_url)
    if not validate_channel_url(normalized_url):
        raise ValueError(
            "Invalid channel URL format. Supported: https://youtube.com/@name, /channel/UC..., /c/name, /user/name"
        )

    output_root = Path(config.output_folder)
    output_root.mkdir(parents=True, exist_ok=True)

    fetcher = fetcher or YouTubeChannelFetcher(config.youtube_api_key)
    _emit(logger, f"Running audit for: {normalized_url}")

    def do_fetch():
        channel_id = fetcher.extract_channel_id(normalized_url)
        channel_info = fetcher.fetch_channel_info(channel_id)
        videos = fetcher.fetch_channel_videos(channel_info["uploadsPlaylistId"], config.max_videos)
        playlists = fetcher.fetch_playlists(channel_id)
        return channel_id, Path(fetcher.save_data(channel_info, videos, playlists, output_root / channel_id))

    channel_id, raw_data_path = _capture_step(logger, "Fetch Channel Data", do_fetch)
    _emit(logger, f"Raw data saved: {raw_data_path}")

    with raw_data_path.open("r", encoding="utf-8") as raw_file:
        raw_data = json.load(raw_file)
    bundle = load_bundle(raw_data)

    report = _capture_step(
        logger, "Analyze Videos",
        lambda: analyze_channel(bundle, config.to_analysis_config()),
    )
    analysis_data = report.to_dict()

    analysis_path = raw_data_path.parent / "analysis.json"
    with analysis_path.open("w", encoding="utf-8") as analysis_file:
        json.dump(analysis_data, analysis_file, indent=2, ensure_ascii=False)
    _emit(logger, f"Analysis saved: {analysis_path}")

    excel_path = raw_data_path.parent / "audit_report.xlsx"
    _capture_step(logger, "Export Excel", lambda: ExcelExporter(analysis_data).export(excel_path))

    markdown_path = raw_data_path.parent / "report.md"

    def do_markdown():
        markdown_path.write_text(MarkdownReportGenerator(analysis_data).generate(), encoding="utf-8")

    _capture_step(logger, "Generate Markdown", do_markdown)

    sheet_url = None
    if config.google_sheet_id:
        sheet_url = _capture_step(
            logger, "Export Google Sheets",
            lambda: sheets_exporter.export(analysis_data, config.google_sheet_id),
        )

    return {
        "channel_id": channel_id,
        "channel_name": report.channel.name,
        "raw_data_path": str(raw_data_path),
        "analysis_path": str(analysis_path),
        "excel_path": str(excel_path),
        "markdown_path": str(markdown_path),
        "sheet_url": sheet_url,
        "summary": extract_summary_metrics(analysis_data),
        "quota_used": int(raw_data.get("metadata", {}).get("quotaUsed", 0)),
    }
