"""
Data models for S3 object metadata.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from .errors import MetaError


@dataclass(frozen=True)
class ObjectRecord:
    """Normalized view of a single storage object."""
    key: str
    size: int
    last_modified: datetime


@dataclass
class ListingPage:
    """One batch of records returned by a single listing call."""
    records: List[ObjectRecord] = field(default_factory=list)
    next_token: Optional[str] = None
    total_count_hint: Optional[int] = None

    @property
    def is_truncated(self) -> bool:
        return self.next_token is not None


def parse_location(location: str) -> Tuple[str, Optional[str]]:
    """
    Split an S3 location into (bucket, prefix).

    The s3:// scheme is optional; the prefix is everything after the
    first slash and is None when absent or empty.
    """
    if location is None:
        raise MetaError("Bucket name not provided")

    path = location.strip()
    if path.startswith("s3://"):
        path = path[len("s3://"):]

    bucket, _, prefix = path.partition("/")
    if not bucket:
        raise MetaError("Bucket name not provided")

    return bucket, prefix or None


@dataclass
class MetaConfig:
    """Configuration for a metadata scan."""
    bucket: str
    prefix: Optional[str] = None

    # Connection settings
    region: Optional[str] = None
    profile: Optional[str] = None
    endpoint_url: Optional[str] = None
    connect_timeout: int = 5
    read_timeout: int = 60
    max_attempts: int = 5

    # Listing settings
    page_size: int = 1000
    max_page_size: int = 1000  # S3 never returns more per call

    # Report history (DuckDB), disabled when None
    db_path: Optional[str] = None

    verbose: bool = False

    @classmethod
    def from_location(cls, location: str, **kwargs) -> "MetaConfig":
        """Build a config from an s3://bucket/prefix location."""
        bucket, prefix = parse_location(location)
        return cls(bucket=bucket, prefix=prefix, **kwargs)

    @property
    def location(self) -> str:
        return f"s3://{self.bucket}/{self.prefix or ''}"

    def __post_init__(self):
        # Ensure reasonable bounds
        self.page_size = max(1, min(self.page_size, self.max_page_size))
        self.max_attempts = max(1, self.max_attempts)
