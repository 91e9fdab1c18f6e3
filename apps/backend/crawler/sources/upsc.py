"""UPSC recruitment advertisements (upsc.gov.in, not www.upsc.gov.in)"""
from .base import Endpoint, ListingSource, contains_any

RELEVANT_KEYWORDS = [
    'recruit', 'vacancy', 'adverti', 'exam', 'post', 'selection', 'notification',
    'civil service', 'upsc',
]


class UPSCSource(ListingSource):
    name = "upsc"
    tag = "UPSC"
    source_name = "UPSC (Union Public Service Commission)"
    source_url = "https://upsc.gov.in"
    category = "UPSC"
    state = "Central"

    endpoints = (
        Endpoint(
            url="https://upsc.gov.in/recruitment/recruitment-advertisement",
            base_url="https://upsc.gov.in",
            label="Advertisements",
            selectors=("a",),
            limit=25,
        ),
    )

    def is_relevant(self, title: str) -> bool:
        return contains_any(title, RELEVANT_KEYWORDS)
