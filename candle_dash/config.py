# candle_dash/config.py
import os
from dataclasses import dataclass
from dotenv import load_dotenv

# Loads variables from a local .env file into environment variables (dev only).
load_dotenv()


@dataclass(frozen=True)
class Settings:
    # App config
    app_env: str
    log_level: str
    data_mode: str
    default_symbol: str
    default_interval: str

    # Provider config (Polygon.io)
    polygon_base_url: str
    polygon_api_key: str
    polygon_timeout_seconds: float
    polygon_page_limit: int


def get_settings() -> Settings:
    """
    Reads env vars and returns a Settings object.

    POLYGON_API_KEY may be empty here: mock mode never needs it, and live mode
    reports the missing key when a fetch is attempted.
    """
    return Settings(
        app_env=os.getenv("APP_ENV", "local"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        data_mode=os.getenv("DATA_MODE", "mock").strip().lower(),
        default_symbol=os.getenv("DEFAULT_SYMBOL", "AAPL").strip().upper(),
        default_interval=os.getenv("DEFAULT_INTERVAL", "1h").strip(),
        polygon_base_url=os.getenv("POLYGON_BASE_URL", "https://api.polygon.io").rstrip("/"),
        polygon_api_key=os.getenv("POLYGON_API_KEY", "").strip(),
        polygon_timeout_seconds=float(os.getenv("POLYGON_TIMEOUT_SECONDS", "20")),
        polygon_page_limit=int(os.getenv("POLYGON_PAGE_LIMIT", "5000")),
    )
