import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

env_path = Path(__file__).resolve().parent.parent / '.env'


def _as_bool(raw: Optional[str], default: bool) -> bool:
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _as_float(raw: Optional[str], default: float) -> float:
    if raw is None or not raw.strip():
        return default
    return float(raw)


class Settings(BaseModel):
    maersk_consumer_key: Optional[str] = None
    maersk_consumer_secret: Optional[str] = None
    maersk_base_url: str = "https://api.maersk.com"
    maersk_timeout_seconds: float = 20.0
    include_document_events: bool = True
    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Reads the .env file once and freezes the result for the process."""
    load_dotenv(dotenv_path=env_path)
    return Settings(
        maersk_consumer_key=os.getenv("MAERSK_API_CONSUMER_KEY"),
        maersk_consumer_secret=os.getenv("MAERSK_API_CONSUMER_SECRET"),
        maersk_base_url=os.getenv("MAERSK_BASE_URL", "https://api.maersk.com"),
        maersk_timeout_seconds=_as_float(os.getenv("MAERSK_TIMEOUT_SECONDS"), 20.0),
        include_document_events=_as_bool(os.getenv("TRACKING_INCLUDE_DOCUMENT_EVENTS"), True),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
