from __future__ import annotations

from typing import List

from candle_dash.errors import InvalidSelectionError
from candle_dash.models.market import Symbol, TimeInterval

AVAILABLE_SYMBOLS: List[Symbol] = [
    Symbol(id="AAPL", name="Apple Inc.", base_price=175, volatility=2),
    Symbol(id="GOOGL", name="Alphabet Inc.", base_price=140, volatility=2.5),
    Symbol(id="TSLA", name="Tesla, Inc.", base_price=250, volatility=4),
    Symbol(id="SPY", name="S&P 500 ETF", base_price=450, volatility=1.5),
    Symbol(id="QQQ", name="Nasdaq 100 ETF", base_price=380, volatility=1.8),
    Symbol(id="DIA", name="Dow Jones ETF", base_price=350, volatility=1.3),
]

TIME_INTERVALS: List[TimeInterval] = [
    TimeInterval(id="1m", label="1 Minute", minutes=1),
    TimeInterval(id="5m", label="5 Minutes", minutes=5),
    TimeInterval(id="15m", label="15 Minutes", minutes=15),
    TimeInterval(id="30m", label="30 Minutes", minutes=30),
    TimeInterval(id="1h", label="1 Hour", minutes=60),
    TimeInterval(id="4h", label="4 Hours", minutes=240),
    TimeInterval(id="1d", label="1 Day", minutes=1440),
]


def get_symbol(symbol_id: str) -> Symbol:
    wanted = (symbol_id or "").strip().upper()
    for s in AVAILABLE_SYMBOLS:
        if s.id == wanted:
            return s
    raise InvalidSelectionError(f"Unknown symbol '{symbol_id}'")


def get_interval(interval_id: str) -> TimeInterval:
    wanted = (interval_id or "").strip()
    for tf in TIME_INTERVALS:
        if tf.id == wanted:
            return tf
    raise InvalidSelectionError(f"Unknown interval '{interval_id}'")
