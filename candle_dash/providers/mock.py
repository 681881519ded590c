from __future__ import annotations

import logging
import math
import random
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

from candle_dash.dates import end_of_day
from candle_dash.models.market import Candle, Symbol, TimeInterval, round_price
from candle_dash.providers.base import CandleProvider

log = logging.getLogger("mock_provider")

LOOKBACK_DAYS = 30
MINUTES_PER_DAY = 24 * 60


def generate_mock_data(
    symbol: Symbol,
    interval: TimeInterval,
    end: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> List[Candle]:
    """
    Random-walk candles over the last 30 days, most recent last.

    - floor(30 days / interval) + 1 candles, the last one dated `end`
    - each close moves from the previous close by a random % scaled by
      volatility * sqrt(interval_minutes / 1440)
    - wicks extend past the body by up to 2x that scaled volatility
    - prices rounded to 2 decimals
    """
    rng = rng or random.Random()
    end = end or datetime.now(timezone.utc)

    num_candles = (LOOKBACK_DAYS * MINUTES_PER_DAY) // interval.minutes
    adjusted = symbol.volatility * math.sqrt(interval.minutes / MINUTES_PER_DAY)

    price = float(symbol.base_price)
    out: List[Candle] = []

    for i in range(num_candles, -1, -1):
        ts = end - timedelta(minutes=i * interval.minutes)

        vol = rng.random() * adjusted + adjusted / 2
        change_pct = (rng.random() - 0.5) * vol

        o = price
        c = round_price(price + price * change_pct / 100)
        h = round_price(max(o, c) + rng.random() * (adjusted * 2))
        l = round_price(min(o, c) - rng.random() * (adjusted * 2))

        out.append(Candle(date=ts, open=o, high=h, low=l, close=c))
        price = c

    return out


class MockProvider(CandleProvider):
    """
    Mock provider: synthetic candles, no network.

    The 30-day window ends at the close of the selected day.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def fetch_candles(self, symbol: Symbol, interval: TimeInterval, day: date) -> List[Candle]:
        candles = generate_mock_data(symbol, interval, end=end_of_day(day), rng=self._rng)
        log.info(
            "Generated mock candles symbol=%s interval=%s day=%s count=%d",
            symbol.id,
            interval.id,
            day.isoformat(),
            len(candles),
        )
        return candles
