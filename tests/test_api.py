import asyncio
import os
import unittest
from datetime import timedelta
from unittest.mock import AsyncMock, patch

os.environ["DATA_MODE"] = "mock"

from fastapi.testclient import TestClient

from candle_dash import state
from candle_dash.dates import default_date, utc_today
from candle_dash.errors import ConfigurationError, TransportError
from candle_dash.main import _startup, app


class TestApi(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls._client_cm = TestClient(app)
        cls.client = cls._client_cm.__enter__()

    @classmethod
    def tearDownClass(cls):
        cls._client_cm.__exit__(None, None, None)

    def setUp(self):
        self.client.post("/api/dashboard/reset")

    def test_health(self):
        resp = self.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["provider_loaded"], "MockProvider")

    def test_catalogs(self):
        symbols = self.client.get("/api/symbols").json()["symbols"]
        intervals = self.client.get("/api/intervals").json()["intervals"]

        self.assertEqual([s["id"] for s in symbols], ["AAPL", "GOOGL", "TSLA", "SPY", "QQQ", "DIA"])
        self.assertEqual(intervals[-1], {"id": "1d", "label": "1 Day", "minutes": 1440})

    def test_candles_query(self):
        day = default_date().isoformat()
        resp = self.client.get("/api/candles", params={"symbol": "TSLA", "interval": "1d", "date": day})

        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["date"], day)
        self.assertEqual(len(body["candles"]), 31)
        self.assertGreaterEqual(body["analysis"]["streak"]["count"], 1)
        self.assertLessEqual(body["analysis"]["streak"]["count"], 31)

    def test_candles_future_date_rejected(self):
        tomorrow = (utc_today() + timedelta(days=1)).isoformat()
        resp = self.client.get("/api/candles", params={"date": tomorrow})

        self.assertEqual(resp.status_code, 422)
        self.assertEqual(resp.json()["actions"], [])

    def test_candles_unknown_symbol(self):
        resp = self.client.get("/api/candles", params={"symbol": "XXX"})
        self.assertEqual(resp.status_code, 422)
        self.assertIn("XXX", resp.json()["error"])

    def test_candles_transport_error(self):
        err = TransportError("Market data API returned HTTP 500: oops", status_code=500)
        with patch.object(state.provider, "fetch_candles", side_effect=err):
            resp = self.client.get("/api/candles")

        self.assertEqual(resp.status_code, 502)
        self.assertIn("500", resp.json()["error"])
        self.assertEqual(resp.json()["actions"], ["retry", "reset"])

    def test_candles_configuration_error(self):
        with patch.object(state.provider, "fetch_candles", side_effect=ConfigurationError("no key")):
            resp = self.client.get("/api/candles")
        self.assertEqual(resp.status_code, 503)

    def test_dashboard_select_and_reject_future_date(self):
        resp = self.client.post("/api/dashboard/select", params={"interval": "1d"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.json()["candles"]), 31)

        tomorrow = (utc_today() + timedelta(days=1)).isoformat()
        resp = self.client.post("/api/dashboard/select", params={"date": tomorrow})
        self.assertEqual(resp.status_code, 422)

        snap = self.client.get("/api/dashboard").json()
        self.assertEqual(snap["selection"]["interval"]["id"], "1d")
        self.assertEqual(snap["selection"]["date"], default_date().isoformat())

    def test_dashboard_error_then_retry(self):
        with patch.object(state.provider, "fetch_candles", side_effect=TransportError("down")):
            snap = self.client.post("/api/dashboard/retry").json()
        self.assertEqual(snap["error"], "down")
        self.assertEqual(snap["actions"], ["retry", "reset"])

        snap = self.client.post("/api/dashboard/retry").json()
        self.assertIsNone(snap["error"])
        self.assertTrue(snap["candles"])

    def test_startup_loads_in_threadpool(self):
        with patch("candle_dash.main.run_in_threadpool", new_callable=AsyncMock) as pool:
            asyncio.run(_startup())

        pool.assert_awaited_once_with(state.session.load)
