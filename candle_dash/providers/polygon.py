from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, List, Optional

import httpx

from candle_dash.errors import ConfigurationError, FormatError, TransportError
from candle_dash.models.market import Candle, Symbol, TimeInterval
from candle_dash.providers.base import CandleProvider

log = logging.getLogger("polygon_provider")

# "DELAYED" is what Polygon reports on plans without real-time data.
SUCCESS_STATUSES = ("OK", "DELAYED")
REQUIRED_FIELDS = ("t", "o", "h", "l", "c")


class PolygonProvider(CandleProvider):
    """
    Polygon.io Provider (REST aggregates).

    One request per fetch: all bars of a single day at the interval's minute
    granularity. Polygon returns them newest first; we hand them back oldest
    first.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.polygon.io",
        timeout_s: float = 20.0,
        page_limit: int = 5000,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.api_key = (api_key or "").strip()
        self.base_url = base_url.rstrip("/")
        self.page_limit = page_limit
        self._client = client or httpx.Client(timeout=timeout_s)

    def close(self) -> None:
        self._client.close()

    # -------------------------
    # Public interface used by the app
    # -------------------------
    def fetch_candles(self, symbol: Symbol, interval: TimeInterval, day: date) -> List[Candle]:
        """
        Aggregates endpoint:
          GET {base_url}/v2/aggs/ticker/{ticker}/range/{minutes}/minute/{day}/{day}
        """
        if not self.api_key:
            raise ConfigurationError("POLYGON_API_KEY is missing. Add it to .env")

        day_s = day.isoformat()
        url = (
            f"{self.base_url}/v2/aggs/ticker/{symbol.id.upper()}"
            f"/range/{interval.minutes}/minute/{day_s}/{day_s}"
        )
        params = {
            "adjusted": "true",
            "sort": "desc",
            "limit": str(self.page_limit),
            "apiKey": self.api_key,
        }

        try:
            resp = self._client.get(url, params=params)
        except httpx.HTTPError as e:
            raise TransportError(f"Request to market data API failed: {e}") from e

        if not resp.is_success:
            raise TransportError(
                f"Market data API returned HTTP {resp.status_code}: {resp.text}",
                status_code=resp.status_code,
                body=resp.text,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise FormatError("Market data API returned a non-JSON body") from e

        if not isinstance(data, dict) or data.get("status") not in SUCCESS_STATUSES:
            status = data.get("status") if isinstance(data, dict) else None
            raise FormatError(f"Market data API reported status={status!r}")

        results = data.get("results")
        # Polygon omits "results" entirely on an empty day.
        if results is None and data.get("resultsCount") == 0:
            results = []
        if not isinstance(results, list):
            raise FormatError("Market data API response has no results list")

        out = self._normalize(results)
        log.info(
            "Fetched polygon candles symbol=%s interval=%s day=%s raw=%d kept=%d",
            symbol.id,
            interval.id,
            day_s,
            len(results),
            len(out),
        )
        return out

    # -------------------------
    # Normalization
    # -------------------------
    def _normalize(self, rows: List[Any]) -> List[Candle]:
        out: List[Candle] = []
        for row in rows:
            if not isinstance(row, dict):
                continue

            # Falsy counts as missing, so a genuine 0 price is dropped too.
            if not all(row.get(k) for k in REQUIRED_FIELDS):
                log.debug("Skipping partial polygon bar=%s", row)
                continue

            v = row.get("v")
            out.append(
                Candle(
                    date=datetime.fromtimestamp(row["t"] / 1000.0, tz=timezone.utc),
                    open=float(row["o"]),
                    high=float(row["h"]),
                    low=float(row["l"]),
                    close=float(row["c"]),
                    volume=float(v) if v is not None else None,
                )
            )

        out.sort(key=lambda x: x.date)
        return out
