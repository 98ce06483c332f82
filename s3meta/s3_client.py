"""
S3 listing client.
"""

import time
from typing import Any, Callable, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from .errors import XML_MARKER, MetaError, translate_fault
from .models import ListingPage, MetaConfig, ObjectRecord


def client_error_message(err: ClientError) -> str:
    """
    Message for a botocore ClientError.

    Some S3-compatible endpoints return bodies botocore cannot parse, in
    which case the raw fault document ends up as the error message.
    """
    error = err.response.get('Error', {}) if isinstance(err.response, dict) else {}
    message = error.get('Message') or ''
    if message.startswith(XML_MARKER):
        return translate_fault(message)
    return translate_fault(str(err))


class S3Lister:
    """Lists objects under an S3 location one page at a time."""

    def __init__(self, config: MetaConfig, client: Any = None,
                 log_callback: Callable[[str], None] = None):
        self.config = config
        self.log = log_callback
        self.client = client or self._make_client()
        self.calls = 0

    def _make_client(self):
        """Create an S3 client from the config."""
        try:
            session = boto3.session.Session(
                profile_name=self.config.profile,
                region_name=self.config.region
            )
            return session.client(
                "s3",
                endpoint_url=self.config.endpoint_url,
                config=Config(
                    connect_timeout=self.config.connect_timeout,
                    read_timeout=self.config.read_timeout,
                    retries={'max_attempts': self.config.max_attempts, 'mode': 'standard'}
                )
            )
        except BotoCoreError as e:
            raise MetaError.from_exception(e) from e

    def _request(self, token: Optional[str]) -> Dict[str, Any]:
        request = {
            'Bucket': self.config.bucket,
            'MaxKeys': self.config.page_size,
        }
        if self.config.prefix:
            request['Prefix'] = self.config.prefix
        if token:
            request['ContinuationToken'] = token
        return request

    def list_page(self, token: Optional[str] = None) -> ListingPage:
        """Fetch a single page of the listing, starting at `token`."""
        start_time = time.time()
        self.calls += 1

        try:
            response = self.client.list_objects_v2(**self._request(token))
        except ClientError as e:
            raise MetaError(client_error_message(e)) from e
        except BotoCoreError as e:
            raise MetaError.from_exception(e) from e

        records = [
            ObjectRecord(
                key=entry['Key'],
                size=entry.get('Size', 0) or 0,
                last_modified=entry.get('LastModified')
            )
            for entry in response.get('Contents', [])
        ]

        if self.log:
            self.log(f"  [S3] list_objects_v2 #{self.calls}: {len(records)} keys "
                     f"in {time.time() - start_time:.2f}s")

        return ListingPage(
            records=records,
            next_token=response.get('NextContinuationToken'),
            total_count_hint=response.get('KeyCount')
        )
