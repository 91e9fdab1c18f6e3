"""
Notice source adapters.

One adapter per recruitment body (or group of bodies). Adapters fetch
fixed listing pages and turn them into RawNotices with the shared
extraction heuristics.
"""

from .base import Endpoint, ListingSource, NoticeSource, RawNotice, scrape_endpoints, scrape_listing
from .registry import SourceRegistry, build_default_registry

__all__ = [
    'Endpoint',
    'ListingSource',
    'NoticeSource',
    'RawNotice',
    'SourceRegistry',
    'build_default_registry',
    'scrape_endpoints',
    'scrape_listing',
]
