"""HTTP adapter for fetching the Dynomite stats document."""

import logging

import httpx

from dynomite_exporter.core.errors import UnreachableUpstreamError

logger = logging.getLogger(__name__)


def build_url(address: str) -> str:
    """Return the request URL for an upstream address.

    A bare ``host:port`` is requested as ``http://host:port``; an address
    that already carries a scheme is used verbatim.
    """
    if address.startswith(("http://", "https://")):
        return address
    return f"http://{address}"


class HTTPStatusSource:
    """Implementation of StatusSourcePort backed by httpx.AsyncClient.

    One client is shared by every collection cycle. httpx.AsyncClient is
    safe for concurrent requests on the same event loop.
    """

    def __init__(
        self,
        address: str,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the source.

        Args:
            address: Upstream ``host:port`` or URL.
            timeout: Connect/read timeout in seconds.
            transport: Optional transport override (used by tests).
        """
        self.address = address
        self.url = build_url(address)
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def fetch(self) -> bytes:
        """GET the stats document and return the raw body.

        Raises:
            UnreachableUpstreamError: On network error, timeout or a final
                non-2xx response status after redirects.
        """
        client = self._get_client()
        try:
            response = await client.get(self.url)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise UnreachableUpstreamError(
                f"{type(e).__name__}: {e}", address=self.address
            ) from e
        logger.debug(
            "Fetched dynomite stats",
            extra={"address": self.address, "bytes": len(response.content)},
        )
        return response.content

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
