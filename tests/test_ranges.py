"""Tests for range type dispatch."""

import pytest

from netblock_mcp_server.errors import UnknownRangeType
from netblock_mcp_server.ranges import (
    DEFAULT_RANGE_TYPE,
    DNS_RANGE_TYPES,
    RANGE_TYPES,
    STATIC_RANGE_TYPES,
    RangeTypeDispatcher,
    describe_range_types,
    netblock_id,
)
from netblock_mcp_server.types import ResolutionResult


class RecordingResolver:
    """Stand-in resolver that records the names it was asked for."""

    def __init__(self):
        self.names = []

    async def resolve(self, seed_name):
        self.names.append(seed_name)
        return ResolutionResult(all=["10.0.0.0/8"], ipv4=["10.0.0.0/8"], ipv6=[])


@pytest.mark.asyncio
@pytest.mark.parametrize("range_type", sorted(STATIC_RANGE_TYPES))
async def test_static_all_equals_ipv4(range_type):
    dispatcher = RangeTypeDispatcher(RecordingResolver())
    result = await dispatcher.lookup(range_type)

    assert result.all == result.ipv4
    assert result.ipv6 == []
    assert dispatcher.resolver.names == []


@pytest.mark.asyncio
async def test_legacy_health_checkers():
    result = await RangeTypeDispatcher(RecordingResolver()).lookup("legacy-health-checkers")
    assert result.ipv4 == ["35.191.0.0/16", "209.85.152.0/22", "209.85.204.0/22"]


@pytest.mark.asyncio
async def test_health_checkers():
    result = await RangeTypeDispatcher(RecordingResolver()).lookup("health-checkers")
    assert result.ipv4 == ["35.191.0.0/16", "130.211.0.0/22"]


@pytest.mark.asyncio
async def test_single_block_static_types():
    dispatcher = RangeTypeDispatcher(RecordingResolver())
    assert (await dispatcher.lookup("restricted-googleapis")).ipv4 == ["199.36.153.4/30"]
    assert (await dispatcher.lookup("dns-forwarders")).ipv4 == ["35.199.192.0/19"]
    assert (await dispatcher.lookup("iap-forwarders")).ipv4 == ["35.235.240.0/20"]


@pytest.mark.asyncio
async def test_static_result_does_not_leak_table():
    """Test mutating a static result leaves later lookups unchanged."""
    dispatcher = RangeTypeDispatcher(RecordingResolver())
    result = await dispatcher.lookup("health-checkers")
    result.add_ipv4("1.2.3.4/32")

    again = await dispatcher.lookup("health-checkers")
    assert again.ipv4 == ["35.191.0.0/16", "130.211.0.0/22"]
    assert again.all == ["35.191.0.0/16", "130.211.0.0/22"]


@pytest.mark.asyncio
async def test_cloud_netblocks_resolves_dns():
    resolver = RecordingResolver()
    result = await RangeTypeDispatcher(resolver).lookup("cloud-netblocks")

    assert resolver.names == ["_cloud-netblocks.googleusercontent.com"]
    assert result.ipv4 == ["10.0.0.0/8"]


@pytest.mark.asyncio
async def test_google_netblocks_resolves_dns():
    resolver = RecordingResolver()
    await RangeTypeDispatcher(resolver).lookup("google-netblocks")
    assert resolver.names == ["_spf.google.com"]


@pytest.mark.asyncio
async def test_default_range_type():
    resolver = RecordingResolver()
    await RangeTypeDispatcher(resolver).lookup()

    assert DEFAULT_RANGE_TYPE == "cloud-netblocks"
    assert resolver.names == [DNS_RANGE_TYPES["cloud-netblocks"]]


@pytest.mark.asyncio
async def test_unknown_range_type():
    with pytest.raises(UnknownRangeType) as exc_info:
        await RangeTypeDispatcher(RecordingResolver()).lookup("bogus")

    assert exc_info.value.range_type == "bogus"
    assert "bogus" in str(exc_info.value)


def test_tables_are_immutable():
    with pytest.raises(TypeError):
        STATIC_RANGE_TYPES["health-checkers"] = ("0.0.0.0/0",)
    with pytest.raises(TypeError):
        DNS_RANGE_TYPES["cloud-netblocks"] = "example.com"


def test_netblock_id():
    assert netblock_id("cloud-netblocks") == "netblock-ip-ranges-cloud-netblocks"


def test_describe_range_types():
    described = describe_range_types()

    assert [d["range_type"] for d in described] == list(RANGE_TYPES)
    by_name = {d["range_type"]: d for d in described}
    assert by_name["google-netblocks"] == {
        "range_type": "google-netblocks",
        "source": "dns",
        "record": "_spf.google.com",
    }
    assert by_name["dns-forwarders"]["source"] == "static"
    assert by_name["dns-forwarders"]["cidr_blocks"] == ["35.199.192.0/19"]
