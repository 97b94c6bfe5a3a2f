"""Exceptions raised while looking up netblock ranges."""


class NetblockError(Exception):
    """Base class for netblock lookup failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NetworkError(NetblockError):
    """The request for a TXT record could not be completed."""

    def __init__(self, name: str, cause: Exception):
        super().__init__(f"Error retrieving TXT record for {name}: {cause}")
        self.name = name


class ReadError(NetblockError):
    """The response body for a TXT record could not be read."""

    def __init__(self, name: str, cause: Exception):
        super().__init__(f"Error reading TXT record response for {name}: {cause}")
        self.name = name


class UnknownRangeType(NetblockError):
    """The requested range type is not recognized."""

    def __init__(self, range_type: str):
        super().__init__(f"Unknown range_type: {range_type}")
        self.range_type = range_type
