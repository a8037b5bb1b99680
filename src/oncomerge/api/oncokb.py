"""OncoKB API client for protein-change annotations.

OncoKB is a precision oncology knowledge base that contains information about
the effects and treatment implications of specific cancer gene alterations.

Source: https://www.oncokb.org
API: https://www.oncokb.org/api/v1/annotate/mutations/byProteinChange

Annotation requires an API token, read from $ONCOKB_API_TOKEN unless given
explicitly.
"""

import os
from typing import Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from oncomerge.config.constants import (
    MAX_RETRIES,
    ONCOKB_API_TOKEN_ENV_VAR,
    ONCOKB_API_URL,
    ONCOKB_TIMEOUT,
    RETRY_WAIT_MAX,
    RETRY_WAIT_MIN,
)
from oncomerge.config.debug import get_logger
from oncomerge.errors import EnrichmentFetchError
from oncomerge.models.oncokb import OncoKbQuery

logger = get_logger(__name__)


class OncoKbAPIError(EnrichmentFetchError):
    """Exception raised for OncoKB API errors."""

    pass


class OncoKbClient:
    """Client for the OncoKB annotation API."""

    def __init__(
        self,
        token: str | None = None,
        base_url: str = ONCOKB_API_URL,
        timeout: float = ONCOKB_TIMEOUT,
    ) -> None:
        self.token = token or os.environ.get(ONCOKB_API_TOKEN_ENV_VAR)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "OncoKbClient":
        self._client = httpx.AsyncClient(timeout=self.timeout)
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    @retry(
        retry=retry_if_exception_type((httpx.TransportError, httpx.TimeoutException)),
        stop=stop_after_attempt(MAX_RETRIES),
        wait=wait_exponential(multiplier=1, min=RETRY_WAIT_MIN, max=RETRY_WAIT_MAX),
        reraise=True,
    )
    async def _post(self, path: str, body: Any) -> Any:
        client = self._get_client()
        response = await client.post(
            f"{self.base_url}{path}",
            json=body,
            headers=self._headers(),
        )
        response.raise_for_status()
        return response.json()

    async def annotate_mutations(self, queries: list[OncoKbQuery]) -> dict[str, dict[str, Any]]:
        """Annotate protein-change queries.

        Args:
            queries: Annotation queries; each id must be unique

        Returns:
            Indicator payload per query id

        Raises:
            OncoKbAPIError: If the request fails or the response is malformed
        """
        if not self.token:
            logger.warning("No OncoKB API token configured; request will likely be rejected")

        try:
            data = await self._post(
                "/annotate/mutations/byProteinChange",
                [query.to_request() for query in queries],
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"OncoKB annotation failed: {e}")
            raise OncoKbAPIError(f"OncoKB annotation failed: {e}") from e

        if not isinstance(data, list):
            raise OncoKbAPIError(f"Unexpected OncoKB response type: {type(data).__name__}")

        # Responses come back in request order
        indicator_map: dict[str, dict[str, Any]] = {}
        for query, indicator in zip(queries, data):
            if not isinstance(indicator, dict):
                raise OncoKbAPIError(f"Unexpected OncoKB indicator type: {type(indicator).__name__}")
            echoed = indicator.get("query")
            echoed_id = echoed.get("id") if isinstance(echoed, dict) else None
            indicator_map[echoed_id or query.id] = indicator

        logger.debug(f"Received {len(indicator_map)} OncoKB indicators")
        return indicator_map

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
