"""cBioPortal API client for mutations, studies and COSMIC counts.

ARCHITECTURE:
    Study → molecular profiles ({study}_mutations, {study}_mutations_uncalled)
          → cBioPortal API → MutationCollection (called / uncalled)
    Keywords → cBioPortal API → COSMIC counts

Key Design:
- Async HTTP with connection pooling (httpx.AsyncClient)
- Retry with exponential backoff on transport errors (tenacity)
- Responses parsed into typed pydantic models
- Context manager for session cleanup
- load_collection() turns a fetch into a complete or errored collection,
  so callers decide what to do with failures before merging
"""

import os
from typing import Any, Awaitable

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from oncomerge.config.constants import (
    CALLED_PROFILE_SUFFIX,
    CBIOPORTAL_API_URL,
    CBIOPORTAL_API_URL_ENV_VAR,
    CBIOPORTAL_TIMEOUT,
    MAX_RETRIES,
    RETRY_WAIT_MAX,
    RETRY_WAIT_MIN,
    UNCALLED_PROFILE_SUFFIX,
)
from oncomerge.config.debug import get_logger
from oncomerge.errors import EnrichmentFetchError, OncoMergeError
from oncomerge.models.collection import MutationCollection
from oncomerge.models.cosmic import CosmicCount
from oncomerge.models.mutation import Mutation
from oncomerge.models.study import CancerStudy

logger = get_logger(__name__)

# pydantic ValidationError and JSONDecodeError are both ValueErrors
_RESPONSE_ERRORS = (httpx.HTTPError, ValueError, TypeError)


class CBioPortalError(OncoMergeError):
    """Exception raised for cBioPortal API errors."""

    pass


def called_profile_id(study_id: str) -> str:
    """Molecular profile holding a study's called mutations."""
    return f"{study_id}{CALLED_PROFILE_SUFFIX}"


def uncalled_profile_id(study_id: str) -> str:
    """Molecular profile holding a study's uncalled mutations."""
    return f"{study_id}{UNCALLED_PROFILE_SUFFIX}"


class CBioPortalClient:
    """Client for the cBioPortal REST API.

    Usage:
        async with CBioPortalClient() as client:
            called = await client.fetch_mutations(called_profile_id("msk_impact_2017"), ...)

    API Documentation: https://www.cbioportal.org/api
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = CBIOPORTAL_TIMEOUT,
    ) -> None:
        """Initialize the cBioPortal client.

        Args:
            base_url: API root; defaults to $CBIOPORTAL_API_URL or the public portal
            timeout: Request timeout in seconds
        """
        self.base_url = (
            base_url or os.environ.get(CBIOPORTAL_API_URL_ENV_VAR) or CBIOPORTAL_API_URL
        ).rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "CBioPortalClient":
        """Initialize HTTP client session."""
        self._client = httpx.AsyncClient(timeout=self.timeout)
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Close HTTP client session."""
        await self.close()

    def _get_client(self) -> httpx.AsyncClient:
        """Get the HTTP client, creating one if needed."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    @retry(
        retry=retry_if_exception_type((httpx.TransportError, httpx.TimeoutException)),
        stop=stop_after_attempt(MAX_RETRIES),
        wait=wait_exponential(multiplier=1, min=RETRY_WAIT_MIN, max=RETRY_WAIT_MAX),
        reraise=True,
    )
    async def _post(
        self,
        path: str,
        body: Any,
        params: dict[str, str] | None = None,
    ) -> Any:
        """POST JSON to the API and return the decoded response.

        Raises:
            httpx.HTTPError: On transport failure or non-2xx status
            ValueError: If the body is not JSON
        """
        client = self._get_client()
        response = await client.post(
            f"{self.base_url}{path}",
            params=params,
            json=body,
            headers={"Accept": "application/json"},
        )
        response.raise_for_status()
        return response.json()

    async def fetch_mutations(
        self,
        molecular_profile_id: str,
        sample_list_id: str | None = None,
        sample_ids: list[str] | None = None,
    ) -> list[Mutation]:
        """Fetch mutations of one molecular profile.

        Args:
            molecular_profile_id: e.g. "msk_impact_2017_mutations"
            sample_list_id: Sample list to restrict to (e.g. "msk_impact_2017_all")
            sample_ids: Explicit sample ids; used when no sample list is given

        Returns:
            Parsed Mutation records

        Raises:
            CBioPortalError: If the request fails or the response is malformed
        """
        if sample_list_id:
            body: dict[str, Any] = {"sampleListId": sample_list_id}
        else:
            body = {"sampleIds": sample_ids or []}

        try:
            data = await self._post(
                f"/molecular-profiles/{molecular_profile_id}/mutations/fetch",
                body,
                params={"projection": "DETAILED"},
            )
            mutations = [Mutation.model_validate(item) for item in data]
        except _RESPONSE_ERRORS as e:
            logger.error(f"Failed to fetch mutations for {molecular_profile_id}: {e}")
            raise CBioPortalError(f"Failed to fetch mutations: {e}") from e

        logger.debug(f"Fetched {len(mutations)} mutations from {molecular_profile_id}")
        return mutations

    async def fetch_studies(self, study_ids: list[str]) -> list[CancerStudy]:
        """Fetch study metadata including cancer types.

        Raises:
            CBioPortalError: If the request fails or the response is malformed
        """
        try:
            data = await self._post(
                "/studies/fetch",
                {"studyIds": study_ids},
                params={"projection": "DETAILED"},
            )
            return [CancerStudy.model_validate(item) for item in data]
        except _RESPONSE_ERRORS as e:
            logger.error(f"Failed to fetch studies {study_ids}: {e}")
            raise CBioPortalError(f"Failed to fetch studies: {e}") from e

    async def fetch_cosmic_counts(self, keywords: list[str]) -> list[CosmicCount]:
        """Fetch COSMIC occurrence counts for mutation keywords.

        Args:
            keywords: Mutation keywords, e.g. ["BRAF V600 missense"]

        Returns:
            One CosmicCount per matching COSMIC mutation

        Raises:
            EnrichmentFetchError: If the request fails or the response is malformed
        """
        try:
            data = await self._post("/cosmic-counts/fetch", keywords)
            return [CosmicCount.model_validate(item) for item in data]
        except _RESPONSE_ERRORS as e:
            logger.error(f"COSMIC count lookup failed: {e}")
            raise EnrichmentFetchError(f"COSMIC count lookup failed: {e}") from e

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None


async def load_collection(fetch: Awaitable[list[Mutation]]) -> MutationCollection:
    """Await a mutation fetch and record its outcome as a collection.

    A failed fetch becomes an errored collection instead of an exception;
    callers check it with `ensure_complete` before merging.
    """
    try:
        records = await fetch
    except OncoMergeError as e:
        logger.warning(f"Mutation fetch failed: {e}")
        return MutationCollection.errored(e)
    return MutationCollection.complete(records)
