"""BandwagonHost (64clouds) service info client."""

from typing import Optional

import httpx
import structlog

from cli.config_models import DiskConfig, RetryConfig
from cli.retry import http_retry

logger = structlog.get_logger().bind(source="bwg")


class MetricsFetchError(Exception):
    """Service info could not be retrieved."""


class BWGClient:
    """Fetches ``getServiceInfo`` and exposes the disk figures the classifier needs."""

    def __init__(
        self,
        config: DiskConfig,
        retry_config: Optional[RetryConfig] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.config = config
        self._client = client
        retrying = http_retry(retry_config, exceptions=(httpx.TransportError,))
        self._get = retrying(self._get_once)

    def get_service_info(self) -> dict:
        if not self.config.api_key:
            raise MetricsFetchError("BWG API key is not configured (disk.api_key)")
        if not self.config.veid:
            raise MetricsFetchError("BWG VEID is not configured (disk.veid)")

        logger.info("fetching_service_info", veid=self.config.veid)
        try:
            response = self._get()
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise MetricsFetchError(
                f"API request failed: {e.response.status_code} - {e.response.reason_phrase}"
            ) from e
        except httpx.HTTPError as e:
            raise MetricsFetchError(f"API request failed: {e}") from e
        except ValueError as e:
            raise MetricsFetchError(f"API returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise MetricsFetchError("API returned an unexpected payload")
        if data.get("error", 0) != 0:
            raise MetricsFetchError(f"API returned error: {data.get('error')}")
        return data

    def _get_once(self) -> httpx.Response:
        params = {"veid": self.config.veid, "api_key": self.config.api_key}
        if self._client is not None:
            return self._client.get(self.config.api_url, params=params)
        with httpx.Client(timeout=self.config.timeout_seconds) as client:
            return client.get(self.config.api_url, params=params)


def disk_usage(service_info: dict) -> tuple[int, int]:
    """(used, capacity) in bytes. A missing used figure counts as 0."""
    used = service_info.get("ve_used_disk_space_b") or 0
    capacity = service_info.get("plan_disk") or 0
    try:
        return int(used), int(capacity)
    except (TypeError, ValueError):
        return 0, 0
