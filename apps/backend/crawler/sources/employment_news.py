"""
Employment News (Govt of India) weekly adverts.

The listing aggregates every kind of employer, so category and state are
derived per advert from its title instead of being fixed for the source.
Adverts are table rows or list items; the first link in each row is the
notice.
"""
from typing import List, Tuple

from .base import Endpoint, ListingSource, contains_any

# First match wins
CATEGORY_RULES: List[Tuple[str, List[str]]] = [
    ('BANK', ['bank', 'rbi', 'nabard', 'ibps']),
    ('SSC', ['ssc', 'staff selection']),
    ('RAILWAYS', ['railway', 'rrb']),
    ('UPSC', ['upsc', 'civil service', 'ias']),
    ('DEFENCE', ['defence', 'army', 'navy', 'air force']),
    ('MEDICAL', ['doctor', 'medical', 'nurse', 'health', 'aiims', 'esic', 'nhm']),
    ('PSU', ['psu', 'bhel', 'ongc', 'ntpc']),
]

STATE_RULES: List[Tuple[str, List[str]]] = [
    ('Tamil Nadu', ['tamil nadu', 'tnpsc']),
    ('Maharashtra', ['maharashtra']),
    ('Karnataka', ['karnataka']),
    ('Kerala', ['kerala']),
    ('Delhi', ['delhi', 'ndmc']),
    ('Gujarat', ['gujarat']),
    ('Rajasthan', ['rajasthan']),
    ('Uttar Pradesh', ['uttar pradesh', 'uppsc']),
]


def derive_category(title: str) -> str:
    for category, keywords in CATEGORY_RULES:
        if contains_any(title, keywords):
            return category
    return 'OTHERS'


def derive_state(title: str) -> str:
    for state, keywords in STATE_RULES:
        if contains_any(title, keywords):
            return state
    return 'Central'


class EmploymentNewsSource(ListingSource):
    name = "employment_news"
    tag = "EmploymentNews"
    source_name = "Employment News (Govt of India)"
    source_url = "https://employmentnews.gov.in"
    category = "OTHERS"
    state = "Central"

    endpoints = (
        Endpoint(
            url="https://employmentnews.gov.in/NewVer/Pages/Advt.aspx",
            base_url="https://employmentnews.gov.in",
            label="Adverts",
            selectors=("table tr", ".advt-row", "ul li", ".list-item"),
            fallback_selector="a[href*='Advt'], a[href*='advt'], a[href*='pdf'], a[href*='recruitment']",
            rows=True,
            limit=30,
        ),
    )

    def category_for(self, title: str) -> str:
        return derive_category(title)

    def state_for(self, title: str) -> str:
        return derive_state(title)
