from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import List

from candle_dash.models.market import Candle, Symbol, TimeInterval


class CandleProvider(ABC):
    """
    Provider contract (interface).

    Any provider must implement:
    - fetch_candles(): candles for a symbol/interval/day, oldest first
    """

    @abstractmethod
    def fetch_candles(self, symbol: Symbol, interval: TimeInterval, day: date) -> List[Candle]:
        raise NotImplementedError

    def close(self) -> None:
        """Release network resources (no-op by default)."""
