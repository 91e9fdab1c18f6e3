"""
Railway recruitment notices.

The central RRB portal times out from outside India, so zonal pages are
used: RRC Northern Railway first, then RRB Bhopal and RRB Mumbai while
fewer than 8 notices have been collected.
"""
from .base import Endpoint, ListingSource, contains_any

RAILWAY_SELECTORS = (
    "a[href*='pdf']", "a[href*='PDF']", "a[href*='notification']", "a[href*='Notification']",
    "a[href*='Recruitment']", "a[href*='advt']", "a[href*='Advt']", "table tr td a", "ul li a",
)

RELEVANT_KEYWORDS = [
    'recruitment', 'vacancy', 'notification', 'ntpc', 'group d', 'group-d', 'alp',
    'technician', 'je ', 'junior engineer', 'rrb', 'rrc', 'railway', 'result', 'admit',
    'selection', 'apprent', 'loco pilot', 'paramedical', 'ministerial',
]


def _railway_endpoint(url: str, base_url: str, label: str) -> Endpoint:
    return Endpoint(
        url=url,
        base_url=base_url,
        label=label,
        selectors=RAILWAY_SELECTORS,
        limit=15,
        timeout_ms=20000,
    )


class RRBSource(ListingSource):
    name = "rrb"
    tag = "RRB"
    source_name = "Railway Recruitment Board (RRB)"
    source_url = "https://indianrailways.gov.in"
    category = "RAILWAYS"
    state = "Central"

    min_results = 8
    endpoints = (
        _railway_endpoint("https://www.rrcnr.org/recr.aspx", "https://www.rrcnr.org", "RRC NR"),
        _railway_endpoint("https://rrbbhopal.gov.in/", "https://rrbbhopal.gov.in", "RRB Bhopal"),
        _railway_endpoint("https://www.rrbmumbai.gov.in/", "https://www.rrbmumbai.gov.in", "RRB Mumbai"),
    )

    def is_relevant(self, title: str) -> bool:
        return contains_any(title, RELEVANT_KEYWORDS)
