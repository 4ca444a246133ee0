"""
NLU Export - Configuration Settings
Project-data API credentials, output layout, and export run defaults.
"""

import logging
import os
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """NLU export settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ── Project-data API ──────────────────────────────────────────────
    botmock_api_url: str = Field(default="https://app.botmock.com/api", alias="BOTMOCK_API_URL")
    botmock_token: Optional[str] = Field(default=None, alias="BOTMOCK_TOKEN")
    botmock_team_id: str = Field(default="", alias="BOTMOCK_TEAM_ID")
    botmock_project_id: str = Field(default="", alias="BOTMOCK_PROJECT_ID")
    botmock_board_id: str = Field(default="", alias="BOTMOCK_BOARD_ID")
    request_timeout_seconds: float = Field(default=30.0, alias="REQUEST_TIMEOUT_SECONDS")

    # ── Output ────────────────────────────────────────────────────────
    output_dir: str = Field(default="output", alias="OUTPUT_DIR")
    export_zip: bool = Field(default=False, alias="EXPORT_ZIP")
    export_concurrency: int = Field(default_factory=lambda: os.cpu_count() or 1, alias="EXPORT_CONCURRENCY")

    # ── Logging ───────────────────────────────────────────────────────
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("export_concurrency")
    @classmethod
    def validate_concurrency(cls, v: int) -> int:
        return max(1, v)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.upper()

    def missing_credentials(self) -> list:
        """Names of the API settings required to fetch a project that are unset."""
        required = {
            "BOTMOCK_TOKEN": self.botmock_token,
            "BOTMOCK_TEAM_ID": self.botmock_team_id,
            "BOTMOCK_PROJECT_ID": self.botmock_project_id,
            "BOTMOCK_BOARD_ID": self.botmock_board_id,
        }
        return [name for name, value in required.items() if not value]


settings = Settings()
