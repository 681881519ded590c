import random
import unittest
from datetime import date, datetime, timedelta, timezone

from candle_dash.catalog import get_interval, get_symbol
from candle_dash.dates import end_of_day
from candle_dash.providers.mock import MockProvider, generate_mock_data

END = datetime(2024, 3, 1, 20, 0, tzinfo=timezone.utc)


class TestGenerateMockData(unittest.TestCase):
    def test_one_minute_length(self):
        candles = generate_mock_data(get_symbol("AAPL"), get_interval("1m"), end=END, rng=random.Random(1))
        self.assertEqual(len(candles), 43201)

    def test_daily_length(self):
        candles = generate_mock_data(get_symbol("AAPL"), get_interval("1d"), end=END, rng=random.Random(1))
        self.assertEqual(len(candles), 31)

    def test_dates_are_spaced_and_end_at_anchor(self):
        interval = get_interval("4h")
        candles = generate_mock_data(get_symbol("SPY"), interval, end=END, rng=random.Random(3))

        self.assertEqual(candles[-1].date, END)
        self.assertEqual(candles[0].date, END - timedelta(days=30))
        for prev, curr in zip(candles, candles[1:]):
            self.assertEqual(curr.date - prev.date, timedelta(minutes=interval.minutes))

    def test_random_walk_chains_closes(self):
        symbol = get_symbol("TSLA")
        candles = generate_mock_data(symbol, get_interval("1h"), end=END, rng=random.Random(5))

        self.assertEqual(candles[0].open, symbol.base_price)
        for prev, curr in zip(candles, candles[1:]):
            self.assertEqual(curr.open, prev.close)

    def test_prices_rounded_and_wicks_contain_body(self):
        candles = generate_mock_data(get_symbol("QQQ"), get_interval("15m"), end=END, rng=random.Random(9))

        for c in candles:
            for price in (c.open, c.high, c.low, c.close):
                self.assertEqual(round(price, 2), price)
            self.assertGreaterEqual(c.high, max(c.open, c.close))
            self.assertLessEqual(c.low, min(c.open, c.close))
            self.assertIsNone(c.volume)

    def test_seeded_runs_are_reproducible(self):
        a = generate_mock_data(get_symbol("DIA"), get_interval("30m"), end=END, rng=random.Random(11))
        b = generate_mock_data(get_symbol("DIA"), get_interval("30m"), end=END, rng=random.Random(11))
        self.assertEqual(a, b)


class TestMockProvider(unittest.TestCase):
    def test_window_ends_at_selected_day(self):
        day = date(2024, 2, 14)
        candles = MockProvider(rng=random.Random(0)).fetch_candles(get_symbol("AAPL"), get_interval("1d"), day)

        self.assertEqual(len(candles), 31)
        self.assertEqual(candles[-1].date, end_of_day(day))
