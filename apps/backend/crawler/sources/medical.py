"""
Medical and health sector recruitment: AIIMS New Delhi, ESIC, NHM and the
Tamil Nadu Medical Recruitment Board.

The ESIC server mishandles TLS (SNI warnings, bad chains); it is fetched
with TLS verification off regardless of the global setting. The rest of
the configured fetch policy still applies.
Its page is recruitment-only, so it has no relevance filter. NHM mixes
notices with general content and needs an explicit recruitment word.
"""
from .base import Endpoint, ListingSource, contains_any

RELEVANT_KEYWORDS = [
    'recruit', 'vacancy', 'notification', 'advt', 'advertisement', 'job', 'doctor', 'nurse',
    'physician', 'pharmacist', 'radiographer', 'technician', 'specialist', 'surgeon', 'dental',
    'paramedic', 'anm', 'assistant', 'officer', 'engineer', 'clerk', 'mrb', 'aiims', 'esic',
]

RECRUITMENT_KEYWORDS = [
    'recruit', 'vacancy', 'notification', 'advt', 'advertisement', 'application', 'selection',
    'walk-in', 'walkin', 'engage', 'appoint', 'post of', 'position', 'hiring',
]


def has_recruitment_keyword(title: str) -> bool:
    return contains_any(title, RECRUITMENT_KEYWORDS)


def accept_all(title: str) -> bool:
    return True


class MedicalSource(ListingSource):
    name = "medical"
    tag = "Medical"
    source_name = "Medical / Health Govt Jobs (AIIMS, ESIC, NHM, MRB)"
    source_url = "https://www.aiims.edu"
    category = "MEDICAL"
    state = "Central"

    endpoints = (
        Endpoint(
            url="https://www.aiims.edu/en/notices.html",
            base_url="https://www.aiims.edu",
            label="AIIMS",
            selectors=("a[href*='recruit']", "a[href*='notice']", "a[href*='vacancy']", "a[href*='pdf']"),
            fallback_selector="table tr a, ul li a, div a",
            source_name="AIIMS New Delhi",
            source_url="https://www.aiims.edu",
            state="Central",
        ),
        Endpoint(
            url="https://www.esic.gov.in/recruitments",
            base_url="https://www.esic.gov.in",
            label="ESIC",
            selectors=("a[href*='recruit']", "a[href*='pdf']", "a[href*='vacancy']", "table tr a", "ul li a"),
            fallback_selector=None,
            verify_tls=False,
            source_name="ESIC (Employees' State Insurance Corporation)",
            source_url="https://www.esic.gov.in",
            state="Central",
            is_relevant=accept_all,
        ),
        Endpoint(
            url="https://nhm.gov.in/index1.php?lang=1&level=1&sublinkid=971&lid=235",
            base_url="https://nhm.gov.in",
            label="NHM",
            selectors=(
                "a[href*='.pdf']", "a[href*='recruit']", "a[href*='vacancy']", "a[href*='advt']",
                "table td a", "ul li a",
            ),
            fallback_selector=None,
            source_name="NHM (National Health Mission)",
            source_url="https://nhm.gov.in",
            state="Central",
            is_relevant=has_recruitment_keyword,
        ),
        Endpoint(
            url="https://www.mrb.tn.gov.in",
            base_url="https://www.mrb.tn.gov.in",
            label="MRB",
            selectors=(
                "a[href*='recruit']", "a[href*='notification']", "a[href*='pdf']", "a[href*='vacancy']",
                "table tr a", "ul li a",
            ),
            fallback_selector="a",
            source_name="MRB Tamil Nadu (Medical Recruitment Board)",
            source_url="https://www.mrb.tn.gov.in",
            state="Tamil Nadu",
        ),
    )

    def is_relevant(self, title: str) -> bool:
        return contains_any(title, RELEVANT_KEYWORDS)
