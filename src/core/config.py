"""Application settings, read from the environment (a local .env file is picked up as well)."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///squares.db"
DEFAULT_ANALYSIS_MODEL = "gpt-4o-mini"


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    save_debounce_s: float = 0.5
    analysis_model: str = DEFAULT_ANALYSIS_MODEL
    analysis_base_url: Optional[str] = None
    analysis_api_key: Optional[str] = None
    analysis_temperature: float = 0.8


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Build Settings from SQUARES_* environment variables, falling back to the defaults above."""
    load_dotenv(env_file)
    return Settings(
        database_url=os.getenv("SQUARES_DATABASE_URL", DEFAULT_DATABASE_URL),
        save_debounce_s=float(os.getenv("SQUARES_SAVE_DEBOUNCE_S", "0.5")),
        analysis_model=os.getenv("SQUARES_ANALYSIS_MODEL", DEFAULT_ANALYSIS_MODEL),
        analysis_base_url=os.getenv("SQUARES_ANALYSIS_BASE_URL") or None,
        analysis_api_key=os.getenv("SQUARES_ANALYSIS_API_KEY")
        or os.getenv("OPENAI_API_KEY"),
        analysis_temperature=float(os.getenv("SQUARES_ANALYSIS_TEMPERATURE", "0.8")),
    )
