from typing import Optional

from candle_dash.config import Settings, get_settings
from candle_dash.providers.base import CandleProvider
from candle_dash.providers.mock import MockProvider
from candle_dash.providers.polygon import PolygonProvider


def get_provider(settings: Optional[Settings] = None) -> CandleProvider:
    """
    Provider loader / factory.

    Reads DATA_MODE from config and returns an instance of the selected provider.
    This is the single place that knows about concrete providers.
    """
    settings = settings or get_settings()
    mode = settings.data_mode.strip().lower()

    if mode == "mock":
        return MockProvider()

    if mode == "live":
        return PolygonProvider(
            api_key=settings.polygon_api_key,
            base_url=settings.polygon_base_url,
            timeout_s=settings.polygon_timeout_seconds,
            page_limit=settings.polygon_page_limit,
        )

    raise ValueError(f"Unknown DATA_MODE='{settings.data_mode}'. Expected: mock or live")
