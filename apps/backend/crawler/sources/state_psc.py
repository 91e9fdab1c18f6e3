"""
State public service commissions.

Each commission is its own notice source (name, site and state) within one
adapter. Results, answer keys and other post-exam updates are excluded:
only openings are collected here.
"""
from .base import Endpoint, ListingSource, contains_any

EXCLUDED_KEYWORDS = [
    'result', 'answer key', 'admit card', 'syllabus', 'mark sheet', 'corrigendum',
    'examination rules',
]
EXCLUDED_TITLES = {'odisha public service commission (opsc)'}

RELEVANT_KEYWORDS = [
    'recruit', 'vacancy', 'notification', 'advt', 'advertisement', 'post', 'officer',
    'engineer', 'inspector', 'grade', 'group', 'combined', 'direct recruit',
]


def _psc_endpoint(url: str, base_url: str, label: str, source_name: str, state: str,
                  extra_selectors: tuple, limit: int) -> Endpoint:
    return Endpoint(
        url=url,
        base_url=base_url,
        label=label,
        selectors=("table tr td a", "ul li a") + extra_selectors + ("a[href]",),
        limit=limit,
        timeout_ms=15000,
        source_name=source_name,
        source_url=base_url,
        state=state,
    )


class StatePSCSource(ListingSource):
    name = "state_psc"
    tag = "StateGovt"
    source_name = "State Government PSC Jobs"
    source_url = "https://www.tnpsc.gov.in"
    category = "STATE"
    state = "Various States"

    endpoints = (
        _psc_endpoint(
            "https://www.tnpsc.gov.in/notifications.html", "https://www.tnpsc.gov.in", "TNPSC",
            "TNPSC (Tamil Nadu PSC)", "Tamil Nadu", (".notification a", "a[href*='pdf']"), 15,
        ),
        _psc_endpoint(
            "https://kpsc.kar.nic.in/recruitment.aspx", "https://kpsc.kar.nic.in", "KPSC",
            "KPSC (Karnataka PSC)", "Karnataka", ("a[href*='pdf']", "a[href*='recruit']"), 10,
        ),
        _psc_endpoint(
            "https://mppsc.mp.gov.in/Advertisements", "https://mppsc.mp.gov.in", "MPPSC",
            "MPPSC (Madhya Pradesh PSC)", "Madhya Pradesh", ("a[href*='pdf']", ".advt a"), 10,
        ),
        _psc_endpoint(
            "https://opsc.gov.in/Advt.aspx", "https://opsc.gov.in", "OPSC",
            "OPSC (Odisha PSC)", "Odisha", ("a[href*='pdf']", "a[href*='advt']"), 10,
        ),
    )

    def is_relevant(self, title: str) -> bool:
        lower = title.lower()
        if contains_any(lower, EXCLUDED_KEYWORDS) or lower in EXCLUDED_TITLES:
            return False
        return contains_any(lower, RELEVANT_KEYWORDS)
