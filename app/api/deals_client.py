"""Upstream deals feed client with async HTTP support."""
import logging
import time

import httpx

from app.models import RestaurantDataResponse
from app.metrics import (
    DEALS_API_CALLS_TOTAL,
    DEALS_API_CALL_DURATION_SECONDS,
    DEALS_API_ERRORS_TOTAL,
)

logger = logging.getLogger(__name__)


class DealsAPIClient:
    """Async HTTP client for the restaurant deals JSON feed."""

    def __init__(self, url: str, timeout: float = 10.0):
        """Initialize deals feed client.

        Args:
            url: Full URL of the JSON feed
            timeout: Request timeout in seconds
        """
        self.url = url
        self.timeout = timeout

        self.client = httpx.AsyncClient(
            timeout=timeout,
            limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
        )

    async def close(self):
        """Close the HTTP client and clean up resources."""
        await self.client.aclose()

    async def _request(self) -> dict:
        """GET the feed and decode its JSON body.

        Raises:
            httpx.HTTPStatusError: If response status is not 2xx
            httpx.RequestError: If request fails
            ValueError: If the body is not valid JSON
        """
        logger.debug(f"[DealsAPIClient] GET {self.url}")

        start_time = time.perf_counter()

        try:
            response = await self.client.get(
                self.url, headers={"Accept": "application/json"}
            )
            logger.debug(f"[DealsAPIClient] Response status: {response.status_code}")

            response.raise_for_status()
            response_json = response.json()

            duration = time.perf_counter() - start_time
            DEALS_API_CALL_DURATION_SECONDS.observe(duration)
            DEALS_API_CALLS_TOTAL.labels(status="success").inc()

            return response_json

        except httpx.HTTPStatusError as e:
            self._record_error("http_error", start_time)
            logger.error(f"[DealsAPIClient] HTTP error on GET {self.url}: {e}")
            raise
        except httpx.TimeoutException as e:
            self._record_error("timeout", start_time)
            logger.error(f"[DealsAPIClient] Timeout on GET {self.url}: {e}")
            raise
        except httpx.RequestError as e:
            self._record_error("connection_error", start_time)
            logger.error(f"[DealsAPIClient] Request error on GET {self.url}: {e}")
            raise
        except ValueError as e:
            self._record_error("invalid_payload", start_time)
            logger.error(f"[DealsAPIClient] Invalid JSON from {self.url}: {e}")
            raise

    def _record_error(self, error_type: str, start_time: float) -> None:
        duration = time.perf_counter() - start_time
        DEALS_API_CALL_DURATION_SECONDS.observe(duration)
        DEALS_API_CALLS_TOTAL.labels(status="error").inc()
        DEALS_API_ERRORS_TOTAL.labels(error_type=error_type).inc()

    async def fetch_restaurants(self) -> RestaurantDataResponse:
        """Fetch the full restaurant + deals payload.

        Returns:
            RestaurantDataResponse parsed from the feed

        Raises:
            httpx.HTTPError: On transport or status failures
            ValueError: If the body is not JSON or does not match the schema
        """
        response_data = await self._request()
        if not isinstance(response_data, dict):
            raise ValueError(
                f"Expected a JSON object from deals feed, got {type(response_data).__name__}"
            )

        response = RestaurantDataResponse(**response_data)
        logger.info(
            f"[DealsAPIClient] fetch_restaurants success: "
            f"restaurants_n={len(response.restaurants or [])}"
        )
        return response
