"""Configuration for the channel audit pipeline."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from channel_audit.engine import AnalysisConfig

load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class AppConfig:
    youtube_api_key: str
    max_videos: int
    output_folder: str

    google_sheet_id: str
    google_credentials_path: str
    google_token_path: str

    recommendation_cap: int
    transcript_sample_size: int
    min_reliable_videos: int

    @staticmethod
    def from_env() -> "AppConfig":
        return AppConfig(
            youtube_api_key=os.getenv("YOUTUBE_API_KEY", ""),
            max_videos=_env_int("MAX_VIDEOS", 0),
            output_folder=os.getenv("OUTPUT_FOLDER", ".tmp/youtube_audits"),
            google_sheet_id=os.getenv("GOOGLE_SHEET_ID", ""),
            google_credentials_path=os.getenv("GOOGLE_CREDENTIALS_PATH", "credentials.json"),
            google_token_path=os.getenv("GOOGLE_TOKEN_PATH", "token.json"),
            recommendation_cap=_env_int("RECOMMENDATION_CAP", 10),
            transcript_sample_size=_env_int("TRANSCRIPT_SAMPLE_SIZE", 20),
            min_reliable_videos=_env_int("MIN_RELIABLE_VIDEOS", 10),
        )

    def to_analysis_config(self) -> AnalysisConfig:
        return AnalysisConfig(
            recommendation_cap=self.recommendation_cap,
            transcript_sample_size=self.transcript_sample_size,
            min_reliable_videos=self.min_reliable_videos,
        )
