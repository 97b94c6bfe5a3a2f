"""Netblock resolver that expands SPF-style TXT records fetched over HTTPS."""

import logging
from collections import deque
from typing import Optional

import httpx

from netblock_mcp_server.errors import NetworkError, ReadError
from netblock_mcp_server.types import ResolutionResult

logger = logging.getLogger(__name__)

# DNS-over-HTTPS JSON API queried for TXT records
DEFAULT_DNS_ENDPOINT = "https://dns.google.com/resolve"

IP4_PREFIX = "ip4:"
IP6_PREFIX = "ip6:"
INCLUDE_PREFIX = "include:"


def parse_includes(raw: str) -> list[str]:
    """Return the names referenced by ``include:`` tokens, in order."""
    return [
        token[len(INCLUDE_PREFIX):]
        for token in raw.split()
        if token.startswith(INCLUDE_PREFIX)
    ]


class NetblockResolver:
    """Resolves a DNS name into the CIDR blocks its TXT records list."""

    def __init__(
        self,
        endpoint: str = DEFAULT_DNS_ENDPOINT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = endpoint
        self._transport = transport

    def _create_client(self) -> httpx.AsyncClient:
        """Create an HTTP client, using the injected transport if any."""
        return httpx.AsyncClient(transport=self._transport)

    async def _fetch(self, client: httpx.AsyncClient, name: str) -> str:
        logger.debug(f"Fetching TXT record for {name}")
        request = client.build_request(
            "GET", self.endpoint, params={"name": name, "type": "TXT"}
        )

        try:
            response = await client.send(request, stream=True)
        except httpx.RequestError as e:
            raise NetworkError(name, e) from e

        try:
            await response.aread()
        except (httpx.RequestError, httpx.StreamError) as e:
            raise ReadError(name, e) from e
        finally:
            await response.aclose()

        return response.text

    async def fetch_record(self, name: str) -> str:
        """
        Fetch the raw TXT record response for a name.

        Args:
            name: Domain name to query

        Returns:
            Response body as text

        Raises:
            NetworkError: if the request cannot be completed
            ReadError: if the response body cannot be read
        """
        async with self._create_client() as client:
            return await self._fetch(client, name)

    async def resolve(self, seed_name: str) -> ResolutionResult:
        """
        Expand a seed record into the CIDR blocks of every included record.

        The seed record is only an index: its ``include:`` tokens are queued
        and any ``ip4:``/``ip6:`` tokens it carries are not collected. Queued
        records are fetched one at a time, breadth-first, and their own
        ``include:`` tokens are appended to the queue. There is no visited set
        or depth limit, so an include cycle never terminates.

        Args:
            seed_name: Domain name of the seed record

        Returns:
            ResolutionResult with blocks in discovery order

        Raises:
            NetworkError, ReadError: from any fetch; nothing partial is returned
        """
        result = ResolutionResult()

        async with self._create_client() as client:
            queue = deque(parse_includes(await self._fetch(client, seed_name)))

            while queue:
                name = queue.popleft()
                raw = await self._fetch(client, name)
                for token in raw.split():
                    if token.startswith(IP4_PREFIX):
                        result.add_ipv4(token[len(IP4_PREFIX):])
                    elif token.startswith(IP6_PREFIX):
                        result.add_ipv6(token[len(IP6_PREFIX):])
                    elif token.startswith(INCLUDE_PREFIX):
                        queue.append(token[len(INCLUDE_PREFIX):])

        return result
