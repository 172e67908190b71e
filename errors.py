# errors.py


class DashboardError(Exception):
    """Base class for errors raised by the dashboard flows."""


class ChartInputError(DashboardError):
    """Chart analysis inputs failed local validation. No request was sent."""


class MissingChartError(ChartInputError):

    def __init__(self, message="Please upload screenshots for both 15m and 1h timeframes."):
        super().__init__(message)


class ChartAnalysisError(DashboardError):

    def __init__(self, message="Failed to analyze charts. Please try again."):
        super().__init__(message)


class MarketDataError(DashboardError):
    """Market endpoint answered with a non-success status."""
