"""Response lifetimes and the fallback-aware result wrapper.

Cache-Control lifetimes are advisory, in seconds, per endpoint:
- Location: 30 minutes from IP headers, 1 hour from explicit coordinates
- Officials: 1 hour (roster data changes rarely)
- Ratings: 5 minutes (new ratings arrive constantly)
- Staff: 30 minutes
- Share images: 24 hours, 1 hour for the fallback image
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class GatewayResult(Generic[T]):
    """Wrapper for gateway reads that may have fallen back to sample data.

    Attributes:
        data: The records returned to the caller
        fallback: True if the store was unreachable and data is substitute data
        error: Human-readable message describing the failure, if any
    """

    data: T
    fallback: bool = False
    error: Optional[str] = None

    @classmethod
    def live(cls, data: T) -> "GatewayResult[T]":
        """Create a result with data read from the store."""
        return cls(data=data, fallback=False, error=None)

    @classmethod
    def substitute(cls, data: T, data_type: str = "data") -> "GatewayResult[T]":
        """Create a result carrying fixed sample data after a store failure."""
        return cls(data=data, fallback=True, error=f"Failed to fetch {data_type}")


class CacheLifetime(Enum):
    """Cache-Control max-age values in seconds for each endpoint."""

    LOCATION = 1800
    LOCATION_COORDINATES = 3600
    OFFICIALS = 3600
    RATINGS = 300
    STAFF = 1800
    SHARE_IMAGE = 86400
    SHARE_IMAGE_FALLBACK = 3600


def cache_control(lifetime: CacheLifetime) -> str:
    """Build a public Cache-Control header value.

    Args:
        lifetime: CacheLifetime enum value

    Returns:
        Header value such as ``public, max-age=3600``
    """
    return f"public, max-age={lifetime.value}"
