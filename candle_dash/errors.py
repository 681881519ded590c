from __future__ import annotations

from typing import Optional


class DashboardError(Exception):
    """Base class for every error the dashboard reports to a user."""


class DataSourceError(DashboardError):
    """Candles could not be produced (config, network or payload problem)."""


class ConfigurationError(DataSourceError):
    pass


class TransportError(DataSourceError):
    """
    HTTP request failed.

    status_code is None when no response arrived at all (timeout, DNS, refused).
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class FormatError(DataSourceError):
    pass


class InvalidSelectionError(DashboardError, ValueError):
    """Unknown symbol or interval id."""


class InvalidDateError(InvalidSelectionError):
    pass


class EmptyDatasetError(DashboardError, ValueError):
    pass
