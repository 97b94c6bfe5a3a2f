"""Response type definitions for Netblock MCP Server."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ResolutionResult:
    """CIDR blocks collected for a range type, in discovery order."""

    all: list[str] = field(default_factory=list)
    ipv4: list[str] = field(default_factory=list)
    ipv6: list[str] = field(default_factory=list)

    def add_ipv4(self, cidr: str) -> None:
        self.ipv4.append(cidr)
        self.all.append(cidr)

    def add_ipv6(self, cidr: str) -> None:
        self.ipv6.append(cidr)
        self.all.append(cidr)


@dataclass
class NetblockRangesResponse:
    """Response for a successful netblock lookup."""

    id: str
    range_type: str
    cidr_blocks: list[str]
    cidr_blocks_ipv4: list[str]
    cidr_blocks_ipv6: list[str]
    success: bool = True


@dataclass
class ErrorResponse:
    """Response for a failed netblock lookup."""

    error: str
    range_type: Optional[str] = None
    success: bool = False
