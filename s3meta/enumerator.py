"""
Paginated enumeration of an object listing into a metrics chain.
"""

import time
from typing import Callable, Optional

from .errors import MetaError
from .metrics import MetricsChain
from .models import ListingPage
from .report import Report


class EnumerationStats:
    """Counters for a single enumeration pass."""

    def __init__(self):
        self.pages = 0
        self.records = 0
        self.total_count_hint: Optional[int] = None
        self.duration = 0.0

    def to_dict(self) -> dict:
        return {
            'pages': self.pages,
            'records': self.records,
            'total_count_hint': self.total_count_hint,
            'duration': self.duration,
        }


class PaginatedEnumerator:
    """
    Drives a listing capability page by page into a metrics chain.

    The listing capability is any object with a
    `list_page(token) -> ListingPage` method. Pages are fetched strictly
    one after another; every record in a page is registered with every
    metric before the next page is requested. Reports are produced only
    once the listing has been fully drained.
    """

    def __init__(self, output_callback: Callable[[str], None] = None,
                 verbose: bool = False):
        self.output = output_callback or print
        self.verbose = verbose
        self.stats = EnumerationStats()

    def _fetch(self, lister, token: Optional[str]) -> ListingPage:
        try:
            return lister.list_page(token)
        except MetaError:
            raise
        except Exception as e:
            raise MetaError.from_exception(e) from e

    def drain(self, chain: MetricsChain, lister):
        """Feed every record of the listing to the chain, without reporting."""
        start_time = time.time()
        token = None

        while True:
            page = self._fetch(lister, token)
            self.stats.pages += 1

            for record in page.records:
                chain.register(record)
            self.stats.records += len(page.records)

            if page.total_count_hint is not None:
                hint = self.stats.total_count_hint or 0
                self.stats.total_count_hint = hint + page.total_count_hint

            if self.verbose:
                self.output(f"  Page {self.stats.pages}: {len(page.records)} objects "
                            f"({self.stats.records:,} total)")

            if not page.is_truncated:
                break

            token = page.next_token

        self.stats.duration = time.time() - start_time

        if self.verbose:
            self.output(f"  Listing complete: {self.stats.records:,} objects in "
                        f"{self.stats.pages} pages ({self.stats.duration:.1f}s)")

    def run(self, chain: MetricsChain, lister) -> Report:
        """Drain the listing, then report every metric in chain order."""
        self.drain(chain, lister)
        return chain.report()
