import argparse
import dataclasses
import logging

from candle_dash.analysis.engine import analyze_candle_data
from candle_dash.catalog import get_interval, get_symbol
from candle_dash.config import get_settings
from candle_dash.dates import default_date, parse_selected_date
from candle_dash.errors import DashboardError
from candle_dash.providers.loader import get_provider


def main() -> None:
    parser = argparse.ArgumentParser(description="Print the candle analysis for one symbol/interval/day")
    parser.add_argument("--symbol", default=None, help="Symbol id (default: DEFAULT_SYMBOL)")
    parser.add_argument("--interval", default=None, help="Interval id (default: DEFAULT_INTERVAL)")
    parser.add_argument("--date", default=None, help="YYYY-MM-DD (default: yesterday)")
    parser.add_argument("--mode", choices=["mock", "live"], default=None, help="Override DATA_MODE")
    args = parser.parse_args()

    settings = get_settings()
    if args.mode:
        settings = dataclasses.replace(settings, data_mode=args.mode)
    logging.basicConfig(level=settings.log_level.upper())

    provider = get_provider(settings)
    try:
        symbol = get_symbol(args.symbol or settings.default_symbol)
        interval = get_interval(args.interval or settings.default_interval)
        day = parse_selected_date(args.date) if args.date else default_date()

        candles = provider.fetch_candles(symbol, interval, day)
        print(f"{symbol.label} {interval.label} {day.isoformat()} ({settings.data_mode}): {len(candles)} candles")
        if not candles:
            print("No candles for this day.")
            return

        result = analyze_candle_data(candles)
        latest = result.latest_candle
        print(
            f"latest {latest.date.isoformat()} O={latest.open:.2f} C={latest.close:.2f} "
            f"change={latest.change:+.2f} ({latest.percent_change:+.2f}%) "
            f"{'bullish' if latest.is_positive else 'bearish'}"
        )
        print(f"streak: {result.streak.count} consecutive {result.streak.type} candles")
    except DashboardError as e:
        raise SystemExit(f"error: {e}")
    finally:
        provider.close()


if __name__ == "__main__":
    main()
