"""State Bank of India current openings. Fetched strictly: an error page is a failure."""
from .base import Endpoint, ListingSource, contains_any

RELEVANT_KEYWORDS = [
    'recruit', 'officer', 'clerk', 'specialist', 'appointment', 'vacancy', 'post', 'notification',
]


class SBISource(ListingSource):
    name = "sbi"
    tag = "SBI"
    source_name = "State Bank of India (SBI)"
    source_url = "https://bank.sbi"
    category = "BANK"
    state = "Central"

    endpoints = (
        Endpoint(
            url="https://bank.sbi/web/careers/current-openings",
            base_url="https://bank.sbi",
            label="Careers",
            selectors=("table a", ".portlet-body a", ".career-item a", "a[href*='recruit']", "a[href*='career']"),
            fallback_selector=None,
            lax=False,
            limit=20,
        ),
    )

    def is_relevant(self, title: str) -> bool:
        return contains_any(title, RELEVANT_KEYWORDS)
