"""
Runtime settings for the CLI and the API.

Read from MPTCP_STATS_* environment variables or a local .env file:
- out_dir: where artifacts (summary.json, mptcp_hosts.json, mptcp_report.md) go
- log_level: logging level name
- extra_timeout_ports: ports reported as additional timeout categories next to
  80 and 443, JSON list e.g. "[8080]"
"""
from __future__ import annotations
from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    out_dir: str = "reports"
    log_level: str = "INFO"
    extra_timeout_ports: List[int] = []

    model_config = SettingsConfigDict(
        env_prefix="MPTCP_STATS_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("extra_timeout_ports")
    @classmethod
    def _valid_ports(cls, v: List[int]) -> List[int]:
        bad = [p for p in v if not 0 < p < 65536]
        if bad:
            raise ValueError(f"not TCP ports: {bad}")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
