"""Visitor-count analytics backed by the Google Analytics Data API.

Requirements:
- google-analytics-data (pip install google-analytics-data)
- GA_PROPERTY_ID and GOOGLE_APPLICATION_CREDENTIALS_JSON (the full
  service-account key JSON) in the environment or config file

Without them the reporter stays unconfigured and callers serve a mock
payload instead of failing.
"""

from __future__ import annotations

import json
import logging

import httpx
from google.analytics.data_v1beta import BetaAnalyticsDataClient
from google.analytics.data_v1beta.types import DateRange, Metric, RunReportRequest
from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError

from photometa.config import AnalyticsConfig, get_config
from photometa.errors import AnalyticsError
from photometa.models import VisitorCount

logger = logging.getLogger(__name__)

ACTIVE_USERS_PERIOD = "30d"
NOT_CONFIGURED_MESSAGE = "Backend not configured with GA credentials"

# Shown by clients when the endpoint itself cannot be reached
CLIENT_FALLBACK_COUNT = 1234


def mock_visitor_count() -> VisitorCount:
    """Payload served when analytics credentials are missing."""
    return VisitorCount(active_users=0, total_users=0, is_mock=True, message=NOT_CONFIGURED_MESSAGE)


class AnalyticsReporter:
    """Runs visitor reports against one GA4 property."""

    def __init__(self, client: BetaAnalyticsDataClient | None, property_id: str | None) -> None:
        self._client = client
        self.property_id = property_id

    @classmethod
    def from_config(cls, config: AnalyticsConfig | None = None) -> AnalyticsReporter:
        """Build a reporter from configuration.

        An unparsable credentials blob is logged and leaves the reporter
        unconfigured.
        """
        config = config or get_config().analytics
        client = None
        if config.credentials_json:
            try:
                credentials = json.loads(config.credentials_json)
                client = BetaAnalyticsDataClient.from_service_account_info(credentials)
            except (ValueError, TypeError, GoogleAuthError) as e:
                logger.error(f"Failed to load GOOGLE_APPLICATION_CREDENTIALS_JSON: {e}")
        return cls(client, config.property_id)

    def is_configured(self) -> bool:
        return self._client is not None and bool(self.property_id)

    def active_users(self) -> VisitorCount:
        """Active users over the last 30 days.

        Raises:
            AnalyticsError: If the reporter is unconfigured or the report fails
        """
        if self._client is None or not self.property_id:
            raise AnalyticsError(NOT_CONFIGURED_MESSAGE)

        request = RunReportRequest(
            property=f"properties/{self.property_id}",
            date_ranges=[DateRange(start_date="30daysAgo", end_date="today")],
            metrics=[Metric(name="activeUsers")],
        )
        try:
            response = self._client.run_report(request)
        except (GoogleAPIError, GoogleAuthError) as e:
            raise AnalyticsError(f"Failed to fetch analytics data: {e}") from e

        value = "0"
        if response.rows and response.rows[0].metric_values:
            value = response.rows[0].metric_values[0].value or "0"
        try:
            active = int(value)
        except ValueError as e:
            raise AnalyticsError(f"Unexpected activeUsers value: {value!r}") from e
        return VisitorCount(active_users=active, period=ACTIVE_USERS_PERIOD)


def get_visitor_count(endpoint: str, timeout: float = 10.0) -> VisitorCount:
    """Fetch the visitor count from a deployed endpoint.

    Never raises: any failure yields a mock count so the counter can
    still be shown.

    Args:
        endpoint: Full URL of ``/api/visitor-count``
        timeout: Request timeout in seconds
    """
    try:
        response = httpx.get(endpoint, timeout=timeout)
        response.raise_for_status()
        return VisitorCount.model_validate(response.json())
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(f"Error fetching visitor count (using mock data): {e}")
        return VisitorCount(
            active_users=CLIENT_FALLBACK_COUNT, period=ACTIVE_USERS_PERIOD, is_mock=True
        )
