"""
Staff Selection Commission notices.

ssc.gov.in is a single-page app with no static HTML, so the regional
offices' static NIC pages are scraped instead: Northern Region first, the
North Eastern Region mirror only when NR yields fewer than 5 notices.
"""
from .base import Endpoint, ListingSource, contains_any

NIC_SELECTORS = ("table tr td a", "ul li a", ".content a", "p a", "div a")

RELEVANT_KEYWORDS = [
    'recruitment', 'vacancy', 'notification', 'adverti', 'selection', 'examination',
    'result', 'admit card', 'cgl', 'chsl', 'gd', 'cpo', 'steno', 'mts', 'phase',
    'call letter', 'cut off', 'merit list',
]


class SSCSource(ListingSource):
    name = "ssc"
    tag = "SSC"
    source_name = "Staff Selection Commission (SSC)"
    source_url = "https://ssc.gov.in"
    category = "SSC"
    state = "Central"

    min_results = 5
    endpoints = (
        Endpoint(
            url="https://sscnr.nic.in/newpages/latest.php",
            base_url="https://sscnr.nic.in",
            label="NR",
            selectors=NIC_SELECTORS,
            limit=20,
            timeout_ms=15000,
        ),
        Endpoint(
            url="https://sscner.nic.in/newpages/latest.php",
            base_url="https://sscner.nic.in",
            label="NER",
            selectors=NIC_SELECTORS,
            limit=20,
            timeout_ms=15000,
        ),
    )

    def is_relevant(self, title: str) -> bool:
        return contains_any(title, RELEVANT_KEYWORDS)
