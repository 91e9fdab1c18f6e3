"""TNPSC notifications linked from the commission's home page"""
from .base import Endpoint, ListingSource, contains_any

RELEVANT_KEYWORDS = [
    'recruit', 'notification', 'post', 'exam', 'vacancy', 'selection', 'group', 'combined',
    'tnpsc',
]


class TNPSCSource(ListingSource):
    name = "tnpsc"
    tag = "TNPSC"
    source_name = "TNPSC (Tamil Nadu Public Service Commission)"
    source_url = "https://www.tnpsc.gov.in"
    category = "STATE"
    state = "Tamil Nadu"

    endpoints = (
        Endpoint(
            url="https://www.tnpsc.gov.in",
            base_url="https://www.tnpsc.gov.in",
            label="Home",
            selectors=(
                "a[href*='notification']", "a[href*='Notification']", "a[href*='recruit']",
                "a[href*='Recruit']", "a[href*='pdf']", "a[href*='vacancy']", "a[href*='group']",
            ),
            fallback_selector="table tr a, ul li a",
            limit=30,
        ),
    )

    def is_relevant(self, title: str) -> bool:
        return contains_any(title, RELEVANT_KEYWORDS)
