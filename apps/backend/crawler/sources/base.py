"""
Base source interface and shared listing-scrape plumbing.

A source adapter knows which fixed pages to fetch for one recruitment body
and how to tell a notice title from navigation noise. Everything else
(link selection, title building, date attribution, URL resolution, caps,
failure isolation) is the shared `scrape_listing` routine.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Iterable, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from core.date_parsing import parse_date
from core.extraction_heuristics import (
    absolute_url,
    build_title,
    extract_date_from_ancestor,
    is_junk_title,
    normalize_title_for_display,
)
from core.job_categorizer import categorize_notice_type, infer_engineering_branches
from core.net import PageFetcher

logger = logging.getLogger(__name__)

MIN_NOTICE_TITLE_LENGTH = 10
DEFAULT_FALLBACK_SELECTOR = "a[href]"
SKIPPED_HREF_SCHEMES = ('javascript:', 'mailto:')


@dataclass
class RawNotice:
    """A notice as scraped, before normalization and deduplication"""
    title: str
    apply_url: str
    source_name: str
    source_url: str
    category: Optional[str] = None
    state: Optional[str] = None
    published_date: Optional[date] = None
    last_date: Optional[date] = None
    notice_type: Optional[str] = None
    engineering_branches: Optional[str] = None


@dataclass(frozen=True)
class Endpoint:
    """
    One fixed listing page of a source.

    selectors are tried together in a single select (matches come back in
    document order); fallback_selector is used only when none of them
    matched. With rows=True the selected elements are rows and the first
    anchor inside each row is the notice link.

    source_name, source_url and state override the source's own values for
    multi-body sources (state PSCs, medical boards). lax and verify_tls, when
    set, override only those flags of the fetcher's configured policy.
    """
    url: str
    base_url: str
    label: str
    selectors: Tuple[str, ...]
    limit: int = 20
    fallback_selector: Optional[str] = DEFAULT_FALLBACK_SELECTOR
    timeout_ms: Optional[int] = None
    lax: Optional[bool] = None
    verify_tls: Optional[bool] = None
    rows: bool = False
    source_name: Optional[str] = None
    source_url: Optional[str] = None
    state: Optional[str] = None
    is_relevant: Optional[Callable[[str], bool]] = field(default=None, compare=False)


def contains_any(title: str, keywords: Iterable[str]) -> bool:
    """Case-insensitive substring check against a keyword list"""
    lower = title.lower()
    return any(keyword in lower for keyword in keywords)


class NoticeSource(ABC):
    """
    Base class for source adapters.

    Subclasses set name (CLI key), tag (log prefix), source_name,
    source_url, category and state, and implement fetch_raw.
    fetch_raw must never raise: failures are logged and yield an empty or
    partial list.
    """

    name: str = ""
    tag: str = ""
    source_name: str = ""
    source_url: str = ""
    category: str = "OTHERS"
    state: str = "Central"

    def __init__(self, fetcher: PageFetcher):
        self.fetcher = fetcher
        self.logger = logging.getLogger(f"{__name__}.{self.name}")

    @abstractmethod
    async def fetch_raw(self) -> List[RawNotice]:
        """Fetch this source's current notices"""
        pass

    def is_relevant(self, title: str) -> bool:
        """Source-specific keyword check; every title passes by default"""
        return True

    def category_for(self, title: str) -> str:
        return self.category

    def state_for(self, title: str) -> str:
        return self.state

    def build_notice(self, link: Tag, title: str, href: str, endpoint: Optional[Endpoint] = None) -> RawNotice:
        """Assemble a RawNotice for an accepted link"""
        return RawNotice(
            title=normalize_title_for_display(title),
            apply_url=href,
            source_name=(endpoint and endpoint.source_name) or self.source_name,
            source_url=(endpoint and endpoint.source_url) or self.source_url,
            category=self.category_for(title),
            state=(endpoint and endpoint.state) or self.state_for(title),
            published_date=parse_date(extract_date_from_ancestor(link, 0)),
            last_date=parse_date(extract_date_from_ancestor(link, 1)),
            notice_type=categorize_notice_type(title),
            engineering_branches=infer_engineering_branches(title),
        )

    def __repr__(self):
        return f"<{self.__class__.__name__}(name={self.name})>"


def select_links(doc: BeautifulSoup, endpoint: Endpoint) -> List[Tag]:
    """Candidate notice links of a page, in document order"""
    elements = doc.select(", ".join(endpoint.selectors)) if endpoint.selectors else []
    if not elements and endpoint.fallback_selector:
        elements = doc.select(endpoint.fallback_selector)

    if not endpoint.rows:
        return elements

    # Nested rows (a list inside a table cell) can share their first link
    links = []
    seen = set()
    for row in elements:
        link = row if row.name == 'a' else row.find('a')
        if link is not None and id(link) not in seen:
            seen.add(id(link))
            links.append(link)
    return links


async def scrape_listing(fetcher: PageFetcher, source: NoticeSource, endpoint: Endpoint) -> List[RawNotice]:
    """
    Scrape one listing page into RawNotices.

    A link is kept when its built title is at least 10 characters, is not a
    junk phrase, passes the relevance check and its href is not a
    javascript:/mailto: link. At most endpoint.limit notices are returned.
    Any failure is logged and whatever was collected so far is returned.
    """
    notices: List[RawNotice] = []
    is_relevant = endpoint.is_relevant or source.is_relevant
    log_tag = f"{source.tag}/{endpoint.label}"

    try:
        doc = await fetcher.fetch_page(
            endpoint.url, timeout_ms=endpoint.timeout_ms, lax=endpoint.lax, verify_tls=endpoint.verify_tls,
        )

        for link in select_links(doc, endpoint):
            title = build_title(link)
            if len(title) < MIN_NOTICE_TITLE_LENGTH or is_junk_title(title) or not is_relevant(title):
                continue

            href = (link.get('href') or '').strip()
            if href.lower().startswith(SKIPPED_HREF_SCHEMES):
                continue

            notices.append(source.build_notice(link, title, absolute_url(endpoint.base_url, href), endpoint))
            if len(notices) >= endpoint.limit:
                break

        logger.info(f"[{log_tag}] Fetched {len(notices)} notices")
    except Exception as e:
        logger.warning(f"[{log_tag}] Failed: {e}")

    return notices


async def scrape_endpoints(
    fetcher: PageFetcher,
    source: NoticeSource,
    endpoints: Iterable[Endpoint],
    min_results: Optional[int] = None,
) -> List[RawNotice]:
    """
    Scrape endpoints one after another.

    With min_results set, later endpoints are mirrors: each one is consulted
    only while fewer than min_results notices have been collected.
    """
    notices: List[RawNotice] = []
    for index, endpoint in enumerate(endpoints):
        if index > 0 and min_results is not None and len(notices) >= min_results:
            break
        notices.extend(await scrape_listing(fetcher, source, endpoint))
    return notices


class ListingSource(NoticeSource):
    """A source made of fixed listing pages scraped with scrape_listing"""

    endpoints: Tuple[Endpoint, ...] = ()
    min_results: Optional[int] = None

    async def fetch_raw(self) -> List[RawNotice]:
        notices = await scrape_endpoints(self.fetcher, self, self.endpoints, self.min_results)
        if len(self.endpoints) > 1:
            logger.info(f"[{self.tag}] Total fetched {len(notices)} notices")
        return notices
