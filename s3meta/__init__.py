"""
S3 Meta

Single pass metadata reporting for S3 buckets and prefixes.
"""

from .bounded import Bounded, apply
from .enumerator import PaginatedEnumerator
from .errors import MetaError, translate_fault
from .metrics import Metric, MetricsChain, chain
from .models import ListingPage, MetaConfig, ObjectRecord
from .report import Report

__version__ = "1.0.0"
__all__ = ['Bounded', 'apply', 'PaginatedEnumerator', 'MetaError', 'translate_fault',
           'Metric', 'MetricsChain', 'chain', 'ListingPage', 'MetaConfig',
           'ObjectRecord', 'Report']
