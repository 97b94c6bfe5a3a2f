"""Range type tables and dispatch to the netblock resolver."""

from types import MappingProxyType
from typing import Optional

from netblock_mcp_server.errors import UnknownRangeType
from netblock_mcp_server.resolver import NetblockResolver
from netblock_mcp_server.types import ResolutionResult

DEFAULT_RANGE_TYPE = "cloud-netblocks"

ID_PREFIX = "netblock-ip-ranges-"

# Range types resolved from SPF-style TXT records
DNS_RANGE_TYPES = MappingProxyType({
    "cloud-netblocks": "_cloud-netblocks.googleusercontent.com",
    "google-netblocks": "_spf.google.com",
})

# Range types with a fixed IPv4 list
STATIC_RANGE_TYPES = MappingProxyType({
    "restricted-googleapis": ("199.36.153.4/30",),
    "dns-forwarders": ("35.199.192.0/19",),
    "iap-forwarders": ("35.235.240.0/20",),
    "health-checkers": ("35.191.0.0/16", "130.211.0.0/22"),
    "legacy-health-checkers": ("35.191.0.0/16", "209.85.152.0/22", "209.85.204.0/22"),
})

RANGE_TYPES = tuple(DNS_RANGE_TYPES) + tuple(STATIC_RANGE_TYPES)


def netblock_id(range_type: str) -> str:
    """Return the stable identifier for a range type's result."""
    return ID_PREFIX + range_type


def describe_range_types() -> list[dict]:
    """Describe every recognized range type and where its blocks come from."""
    described = [
        {"range_type": name, "source": "dns", "record": record}
        for name, record in DNS_RANGE_TYPES.items()
    ]
    described.extend(
        {"range_type": name, "source": "static", "cidr_blocks": list(blocks)}
        for name, blocks in STATIC_RANGE_TYPES.items()
    )
    return described


class RangeTypeDispatcher:
    """Maps a range type to resolved or static CIDR blocks."""

    def __init__(self, resolver: Optional[NetblockResolver] = None):
        self.resolver = resolver or NetblockResolver()

    async def lookup(self, range_type: str = DEFAULT_RANGE_TYPE) -> ResolutionResult:
        """
        Look up the CIDR blocks for a range type.

        Args:
            range_type: Range type name (default: cloud-netblocks)

        Returns:
            ResolutionResult; static types only populate ipv4 and all

        Raises:
            UnknownRangeType: if range_type is not recognized
            NetworkError, ReadError: if DNS resolution fails
        """
        if range_type in DNS_RANGE_TYPES:
            return await self.resolver.resolve(DNS_RANGE_TYPES[range_type])

        if range_type in STATIC_RANGE_TYPES:
            blocks = list(STATIC_RANGE_TYPES[range_type])
            return ResolutionResult(all=list(blocks), ipv4=blocks, ipv6=[])

        raise UnknownRangeType(range_type)
