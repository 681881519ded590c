from candle_dash.config import get_settings
from candle_dash.providers.loader import get_provider
from candle_dash.session import DashboardSession

settings = get_settings()

# Global provider + session for the running API process
provider = get_provider(settings)

session = DashboardSession(
    provider,
    default_symbol=settings.default_symbol,
    default_interval=settings.default_interval,
)
