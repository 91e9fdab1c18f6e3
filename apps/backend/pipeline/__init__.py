"""
Notice persistence pipeline.

Scraped notices are normalized, keyed by content hash and written
append-only to a notice store.
"""

__version__ = "0.1.0"
