import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file if it exists, for local development
# In production, environment variables should be set directly.
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DEFAULT_SCORECARDS_DIR = PROJECT_ROOT / "assets" / "scorecards"


class Settings(BaseSettings):
    scorecards_dir: Path = DEFAULT_SCORECARDS_DIR
    plan_service_url: Optional[str] = None  # unset: plan requests are acknowledged without a URL
    plan_service_timeout: float = 30.0
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    model_config = SettingsConfigDict(env_prefix='SCORECARD_')


@lru_cache()
def get_settings() -> Settings:
    """Get cached Settings instance."""
    return Settings()
