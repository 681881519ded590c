from __future__ import annotations

from typing import Sequence

from candle_dash.errors import EmptyDatasetError
from candle_dash.models.analysis import AnalysisResult, LatestCandle, Streak
from candle_dash.models.market import Candle, round_price


def analyze_candle_data(candles: Sequence[Candle]) -> AnalysisResult:
    """
    Summarize the latest candle and the current same-direction streak.

    A candle is positive when close > open; flat candles count as negative.
    Callers must not pass an empty sequence (EmptyDatasetError).
    """
    if not candles:
        raise EmptyDatasetError("Cannot analyze empty data set")

    latest = candles[-1]
    is_positive = latest.is_positive

    streak_count = 1
    for candle in reversed(candles[:-1]):
        if candle.is_positive != is_positive:
            break
        streak_count += 1

    change = round_price(latest.close - latest.open)
    # open == 0 is not guarded; ZeroDivisionError propagates.
    percent_change = round_price(change / latest.open * 100)

    return AnalysisResult(
        latest_candle=LatestCandle(
            is_positive=is_positive,
            date=latest.date,
            open=latest.open,
            close=latest.close,
            change=change,
            percent_change=percent_change,
        ),
        streak=Streak(
            count=streak_count,
            type="positive" if is_positive else "negative",
        ),
    )
