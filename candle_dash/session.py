from __future__ import annotations

import logging
import threading
from dataclasses import asdict, dataclass
from datetime import date, datetime, timezone
from typing import Callable, List, Optional

from candle_dash.analysis.engine import analyze_candle_data
from candle_dash.catalog import get_interval, get_symbol
from candle_dash.dates import default_date, parse_selected_date, utc_today
from candle_dash.errors import DataSourceError
from candle_dash.models.analysis import AnalysisResult
from candle_dash.models.market import Candle, Symbol, TimeInterval
from candle_dash.providers.base import CandleProvider

log = logging.getLogger("dashboard_session")

ERROR_ACTIONS = ["retry", "reset"]


@dataclass(frozen=True)
class Selection:
    symbol: Symbol
    interval: TimeInterval
    day: date

    def to_dict(self) -> dict:
        return {
            "symbol": asdict(self.symbol),
            "interval": asdict(self.interval),
            "date": self.day.isoformat(),
        }


class DashboardSession:
    """
    Server-side dashboard state.

    selection -> what the user picked (symbol, interval, date)
    candles   -> last successfully loaded sequence (oldest first)
    analysis  -> summary of `candles`, None when there is nothing to analyze
    error     -> one human-readable message when the last load failed

    Every load gets a generation number. A load that finishes after a newer
    one has started is discarded instead of overwriting the newer state.
    """

    def __init__(
        self,
        provider: CandleProvider,
        default_symbol: str = "AAPL",
        default_interval: str = "1h",
        today_fn: Callable[[], date] = utc_today,
    ) -> None:
        self.provider = provider
        self._default_symbol = default_symbol
        self._default_interval = default_interval
        self._today = today_fn
        self._lock = threading.Lock()
        self._generation = 0

        self.selection = self._default_selection()
        self.candles: List[Candle] = []
        self.analysis: Optional[AnalysisResult] = None
        self.error: Optional[str] = None
        self.loaded_at: Optional[datetime] = None

    def _default_selection(self) -> Selection:
        return Selection(
            symbol=get_symbol(self._default_symbol),
            interval=get_interval(self._default_interval),
            day=default_date(self._today()),
        )

    # -------------------------
    # User actions
    # -------------------------
    def select(
        self,
        symbol: Optional[str] = None,
        interval: Optional[str] = None,
        date: Optional[str] = None,
    ) -> dict:
        """
        Change any subset of the selection and reload.

        All fields are validated before anything changes, so a rejected
        date (or unknown id) leaves the previous selection in place.
        """
        new_symbol = get_symbol(symbol) if symbol is not None else None
        new_interval = get_interval(interval) if interval is not None else None
        new_day = parse_selected_date(date, today=self._today()) if date is not None else None

        # Merge under the lock so a concurrent partial update is not lost.
        with self._lock:
            current = self.selection
            self.selection = Selection(
                symbol=new_symbol or current.symbol,
                interval=new_interval or current.interval,
                day=new_day or current.day,
            )

        return self.load()

    def retry(self) -> dict:
        return self.load()

    def reset(self) -> dict:
        with self._lock:
            self.selection = self._default_selection()
            self.error = None
        return self.load()

    # -------------------------
    # Loading
    # -------------------------
    def load(self) -> dict:
        with self._lock:
            self._generation += 1
            generation = self._generation
            selection = self.selection

        candles: List[Candle] = []
        analysis: Optional[AnalysisResult] = None
        error: Optional[str] = None

        try:
            candles = self.provider.fetch_candles(selection.symbol, selection.interval, selection.day)
        except DataSourceError as e:
            log.error(
                "Load failed symbol=%s interval=%s day=%s error=%s",
                selection.symbol.id,
                selection.interval.id,
                selection.day.isoformat(),
                repr(e),
            )
            error = str(e)
        else:
            if candles:
                analysis = analyze_candle_data(candles)

        with self._lock:
            if generation != self._generation:
                log.warning(
                    "Discarding stale load symbol=%s interval=%s generation=%d current=%d",
                    selection.symbol.id,
                    selection.interval.id,
                    generation,
                    self._generation,
                )
            else:
                self.candles = candles
                self.analysis = analysis
                self.error = error
                self.loaded_at = datetime.now(timezone.utc)

        return self.snapshot()

    def snapshot(self) -> dict:
        with self._lock:
            return {
                "selection": self.selection.to_dict(),
                "candles": [c.to_chart_point() for c in self.candles],
                "analysis": self.analysis.model_dump(mode="json") if self.analysis else None,
                "error": self.error,
                "actions": list(ERROR_ACTIONS) if self.error else [],
                "loaded_at": self.loaded_at.isoformat() if self.loaded_at else None,
            }
