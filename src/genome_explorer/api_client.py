"""Async HTTP transport shared by all upstream lookups."""

import time
from typing import Any, Dict, Optional

import httpx

from .config import APIConfig
from .error_handler import MalformedResponse, UpstreamUnavailable
from .logging_config import get_logger, log_api_call

logger = get_logger('api_client')


class ApiClient:
    """Thin wrapper around ``httpx.AsyncClient`` for JSON GET requests.

    Every call is independent: there is no retry, no cache and no state
    shared between in-flight requests beyond the connection pool.

    Usage::

        async with ApiClient(config.api) as client:
            data = await client.get_json(url, params, api_name="UCSC")
    """

    USER_AGENT = "genome-explorer/1.0"

    def __init__(self, config: Optional[APIConfig] = None,
                 client: Optional[httpx.AsyncClient] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize the client.

        Args:
            config: API configuration (timeouts, keys)
            client: Existing AsyncClient to use; it is not closed by this wrapper
            transport: Custom transport for a newly created AsyncClient
        """
        self.config = config or APIConfig()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=self.config.timeout_seconds,
            headers={'User-Agent': self.USER_AGENT},
            transport=transport,
        )

    async def __aenter__(self) -> 'ApiClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def ncbi_params(self) -> Dict[str, str]:
        """Optional NCBI E-utilities identification parameters."""
        params = {}
        if self.config.ncbi_api_key:
            params['api_key'] = self.config.ncbi_api_key
        if self.config.email:
            params['email'] = self.config.email
        return params

    @staticmethod
    def _error_from_body(response: httpx.Response) -> Optional[str]:
        """Error message some services (UCSC) put in the JSON body of a 4xx/5xx."""
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict) and body.get('error'):
            return str(body['error'])
        return None

    async def get_json(self, url: str, params: Optional[Dict[str, Any]] = None,
                       api_name: str = "api",
                       error_message: Optional[str] = None) -> Any:
        """
        GET ``url`` and decode the JSON body.

        Args:
            url: Endpoint URL
            params: Query parameters
            api_name: Name used in log messages
            error_message: Message for the raised error; defaults to a generic one

        Returns:
            Decoded JSON payload

        Raises:
            UpstreamUnavailable: On transport failure or non-success status
            MalformedResponse: When the body is not valid JSON
        """
        start = time.perf_counter()
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as e:
            log_api_call(api_name, url, params, time.perf_counter() - start, False)
            raise UpstreamUnavailable(
                error_message or f"{api_name} request failed",
                details={'url': url, 'reason': str(e)}
            ) from e

        elapsed = time.perf_counter() - start
        if not response.is_success:
            log_api_call(api_name, url, params, elapsed, False, response.status_code)
            details = {'url': url, 'status_code': response.status_code}
            upstream_error = self._error_from_body(response)
            if upstream_error:
                details['upstream_error'] = upstream_error
            raise UpstreamUnavailable(
                error_message or f"{api_name} returned HTTP {response.status_code}",
                details=details
            )

        log_api_call(api_name, url, params, elapsed, True, response.status_code)

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {api_name}: {e}")
            raise MalformedResponse(
                error_message or f"{api_name} returned invalid JSON",
                details={'url': url, 'reason': str(e)}
            ) from e
