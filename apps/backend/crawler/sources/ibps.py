"""
IBPS recruitment notices.

ibps.in is a WordPress site: posts are article/heading links. When the
theme changes and none match, anchors pointing at recruitment URLs are used.
"""
from .base import Endpoint, ListingSource, contains_any

RELEVANT_KEYWORDS = [
    'recruit', 'notification', 'vacancy', 'ibps', 'clerk', 'po ', 'officer', 'specialist',
    'so ', 'rrb', 'crp', 'advt', 'advertisement', 'apply', 'result', 'admit', 'score card',
    'selection', 'interview', 'exam', 'mains', 'prelim',
]


class IBPSSource(ListingSource):
    name = "ibps"
    tag = "IBPS"
    source_name = "IBPS (Institute of Banking Personnel Selection)"
    source_url = "https://www.ibps.in"
    category = "BANK"
    state = "Central"

    endpoints = (
        Endpoint(
            url="https://www.ibps.in/category/recruitment/",
            base_url="https://www.ibps.in",
            label="Recruitment",
            selectors=("article a", "h2 a", "h3 a", ".entry-title a", ".post-title a"),
            fallback_selector="a[href*='ibps'], a[href*='recruit'], a[href*='notification']",
            limit=25,
        ),
    )

    def is_relevant(self, title: str) -> bool:
        return contains_any(title, RELEVANT_KEYWORDS)
