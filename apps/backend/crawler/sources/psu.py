"""Central PSU openings, scraped from the ONGC careers page"""
from .base import Endpoint, ListingSource, contains_any

RELEVANT_KEYWORDS = [
    'recruit', 'vacancy', 'notification', 'career', 'job', 'post', 'engineer', 'officer',
    'apprentice',
]


class PSUSource(ListingSource):
    name = "psu"
    tag = "PSU"
    source_name = "PSU Jobs (ONGC & Central PSUs)"
    source_url = "https://www.ongcindia.com"
    category = "PSU"
    state = "Central"

    endpoints = (
        Endpoint(
            url="https://www.ongcindia.com/wps/wcm/connect/en/career/",
            base_url="https://www.ongcindia.com",
            label="ONGC",
            selectors=(
                "a[href*='recruit']", "a[href*='career']", "a[href*='notification']",
                "a[href*='vacancy']", "a[href*='pdf']", "table tr a", "ul li a", ".ibm-columns a",
            ),
            limit=20,
        ),
    )

    def is_relevant(self, title: str) -> bool:
        return contains_any(title, RELEVANT_KEYWORDS)
