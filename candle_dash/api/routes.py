from __future__ import annotations

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Query

from candle_dash.analysis.engine import analyze_candle_data
from candle_dash.catalog import AVAILABLE_SYMBOLS, TIME_INTERVALS, get_interval, get_symbol
from candle_dash.dates import default_date, parse_selected_date
from candle_dash.state import provider, session, settings

router = APIRouter(prefix="/api")


@router.get("/symbols")
def list_symbols():
    return {"symbols": [asdict(s) for s in AVAILABLE_SYMBOLS]}


@router.get("/intervals")
def list_intervals():
    return {"intervals": [asdict(tf) for tf in TIME_INTERVALS]}


@router.get("/candles")
def candles(
    symbol: Optional[str] = Query(None, description="Symbol id, e.g., AAPL"),
    interval: Optional[str] = Query(None, description="Interval id, e.g., 1h"),
    date: Optional[str] = Query(None, description="YYYY-MM-DD, yesterday or earlier"),
):
    """
    Stateless query:
    - fetches candles for one symbol/interval/day
    - returns chart points plus the analysis (None when no candles)
    """
    sym = get_symbol(symbol or settings.default_symbol)
    tf = get_interval(interval or settings.default_interval)
    day = parse_selected_date(date) if date is not None else default_date()

    rows = provider.fetch_candles(sym, tf, day)
    analysis = analyze_candle_data(rows) if rows else None

    return {
        "symbol": sym.id,
        "interval": tf.id,
        "date": day.isoformat(),
        "candles": [c.to_chart_point() for c in rows],
        "analysis": analysis.model_dump(mode="json") if analysis else None,
    }


@router.get("/dashboard")
def dashboard():
    return session.snapshot()


@router.post("/dashboard/select")
def dashboard_select(
    symbol: Optional[str] = Query(None, description="Symbol id"),
    interval: Optional[str] = Query(None, description="Interval id"),
    date: Optional[str] = Query(None, description="YYYY-MM-DD, yesterday or earlier"),
):
    """
    Update the selection and reload.
    Invalid input is rejected with 422 and the previous selection stays.
    """
    return session.select(symbol=symbol, interval=interval, date=date)


@router.post("/dashboard/retry")
def dashboard_retry():
    return session.retry()


@router.post("/dashboard/reset")
def dashboard_reset():
    return session.reset()
