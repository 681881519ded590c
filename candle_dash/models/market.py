from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional


def round_price(value: float) -> float:
    """Round to cents, halves away from zero, using the float's exact binary value."""
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class Symbol:
    """
    Symbol = one tradable instrument shown in the dashboard.

    base_price / volatility only drive the mock generator:
      base_price: first open of the random walk
      volatility: daily % swing used to scale each step
    """
    id: str
    name: str
    base_price: float = 100.0
    volatility: float = 1.0

    @property
    def label(self) -> str:
        return f"{self.name} ({self.id})"


@dataclass(frozen=True)
class TimeInterval:
    id: str
    label: str
    minutes: int


@dataclass(frozen=True)
class Candle:
    """
    Candle (OHLC, optional volume) for one time bucket.

    date: bucket start (UTC)
    volume: None when the source has no volume (mock data)
    """
    date: datetime
    open: float
    high: float
    low: float
    close: float
    volume: Optional[float] = None

    @property
    def is_positive(self) -> bool:
        return self.close > self.open

    def to_chart_point(self) -> dict:
        """Shape consumed by the candlestick chart (time in unix seconds)."""
        return {
            "time": int(self.date.timestamp()),
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
        }
