from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class LatestCandle(BaseModel):
    """
    Summary of the most recent candle.

    change: close - open (2 decimals)
    percent_change: change / open * 100 (2 decimals)
    """

    is_positive: bool
    date: datetime
    open: float
    close: float
    change: float
    percent_change: float


class Streak(BaseModel):
    """How many trailing candles share the latest candle's direction (>= 1)."""

    count: int
    type: Literal["positive", "negative"]


class AnalysisResult(BaseModel):
    latest_candle: LatestCandle
    streak: Streak
