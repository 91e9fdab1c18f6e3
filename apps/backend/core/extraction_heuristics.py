"""
Layout-agnostic extraction heuristics for notice listings.

Government recruitment pages mix notice links with navigation, "click here"
links and PDF links whose text says nothing. These helpers turn an anchor
into a usable title and find the dates printed next to it, without any
site-specific knowledge beyond generic DOM traversal. Everything here is
pure: no I/O, no state.
"""
import re
import logging
from typing import Optional
from urllib.parse import urljoin, unquote

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from core.date_parsing import extract_date

logger = logging.getLogger(__name__)

MIN_TITLE_LENGTH = 12
MIN_ROW_TEXT_LENGTH = 15
MAX_ROW_TITLE_LENGTH = 120
MAX_DISPLAY_TITLE_LENGTH = 200
MAX_TITLE_ANCESTOR_DEPTH = 4
MAX_DATE_ANCESTOR_DEPTH = 5

# Climbing into these would attribute page-wide text to a single notice
PAGE_CONTAINER_TAGS = {'body', 'html', 'main', 'article'}

# One notice per row; a date search never continues past these
ROW_BOUNDARY_TAGS = {'tr', 'li'}

# Small text-bearing elements searched on their full rendered text
TEXT_BEARING_TAGS = {'td', 'th', 'span', 'a', 'p'}

# Navigation links, generic calls to action and boilerplate that must never
# become a notice title
JUNK_TITLES = frozenset([
    "click here", "download", "view", "here", "pdf", "read more",
    "more details", "details", "apply", "apply now", "apply online",
    "apply here", "link", "advertisement", "advt", "notification",
    "official notification", "official website", "visit", "open",
    "see details", "view details", "check here", "know more",
    "official", "english", "hindi", "corrigendum", "addendum",
    "important notice", "notice", "home", "news", "latest news",
    "recruitment", "vacancy", "result", "answer key", "about us",
    "contact us", "skip to main content", "login", "register",
    "syllabus", "careers", "tenders", "rti", "archives",
])

_DISPLAY_PREFIX = re.compile(
    r"^(Update:|Flash:|New:|Latest:|Notice:|Advertisement:|Advt:|Notification:)\s*",
    re.IGNORECASE,
)
_DOCUMENT_EXTENSION = re.compile(r"\.(pdf|doc|docx|htm|html|php|aspx)$", re.IGNORECASE)


def clean_title(raw: Optional[str]) -> str:
    """Collapse whitespace runs (including newlines and tabs) and trim."""
    if raw is None:
        return ""
    return re.sub(r"\s+", " ", raw).strip()


def normalize_title_for_display(raw: Optional[str]) -> str:
    """
    Clean a title for display and hashing.

    Drops boilerplate prefixes such as "Update:" or "Latest:" and caps the
    length at 200 characters (197 + "...").
    """
    if raw is None:
        return ""
    cleaned = _DISPLAY_PREFIX.sub("", clean_title(raw))
    if len(cleaned) > MAX_DISPLAY_TITLE_LENGTH:
        cleaned = cleaned[:MAX_DISPLAY_TITLE_LENGTH - 3] + "..."
    return cleaned.strip()


def is_junk_title(title: Optional[str]) -> bool:
    """True for blank text, text under 6 characters, or a known junk phrase."""
    if title is None or not title.strip():
        return True
    lower = title.strip().lower()
    if len(lower) < 6:
        return True
    return lower in JUNK_TITLES


def _is_element(node) -> bool:
    return isinstance(node, Tag) and not isinstance(node, BeautifulSoup)


def element_text(element: Tag) -> str:
    """Full rendered text of an element, whitespace-collapsed."""
    return clean_title(element.get_text(" "))


def own_text(element: Tag) -> str:
    """Text directly inside an element, excluding descendants and comments."""
    parts = [
        str(child) for child in element.children
        if isinstance(child, NavigableString) and not isinstance(child, Comment)
    ]
    return clean_title(" ".join(parts))


def _title_from_href(href: Optional[str]) -> str:
    if not href or not href.strip():
        return ""
    filename = href.strip()
    if '/' in filename:
        filename = filename[filename.rfind('/') + 1:]
    if '?' in filename:
        filename = filename[:filename.index('?')]
    filename = _DOCUMENT_EXTENSION.sub("", unquote(filename))
    return clean_title(filename.replace('_', ' ').replace('-', ' '))


def _is_usable(candidate: str) -> bool:
    return len(candidate) >= MIN_TITLE_LENGTH and not is_junk_title(candidate)


def build_title(link: Tag) -> str:
    """
    Build the best available title for an anchor.

    Candidates, in order of preference (first one of at least 12 characters
    that is not a junk phrase wins):
    1. The link's visible text
    2. Its title attribute
    3. The document filename in its href ("SSC_CGL-2025.pdf" -> "SSC CGL 2025")
    4. The text of an ancestor row, truncated to 120 characters

    Returns:
        The chosen title, or the cleaned link text (possibly short or empty)
        when nothing qualifies. Callers reject titles under 10 characters.
    """
    text = element_text(link)
    if _is_usable(text):
        return text

    title_attr = clean_title(link.get('title'))
    if _is_usable(title_attr):
        return title_attr

    from_href = _title_from_href(link.get('href'))
    if _is_usable(from_href):
        return from_href

    ancestor = link.parent
    for _ in range(MAX_TITLE_ANCESTOR_DEPTH):
        if not _is_element(ancestor) or ancestor.name.lower() in PAGE_CONTAINER_TAGS:
            break
        row_text = element_text(ancestor)
        if len(row_text) >= MIN_ROW_TEXT_LENGTH:
            if len(row_text) > MAX_ROW_TITLE_LENGTH:
                row_text = row_text[:MAX_ROW_TITLE_LENGTH] + "…"
            if not is_junk_title(row_text):
                return row_text
        ancestor = ancestor.parent

    return text


def extract_date_from_ancestor(link: Tag, index: int = 0) -> Optional[str]:
    """
    Find the Nth date printed near a link without leaving the link's row.

    Walks up at most 5 levels starting at the link itself. Row boundaries
    (tr, li) and small text-bearing elements (td, th, span, a, p) are
    searched on their full text; any other element only on its own direct
    text, so sibling notices inside a shared container are never scooped
    in. The walk stops at page-level containers and right after a row
    boundary has been searched, whether or not it matched.

    Args:
        link: The anchor element
        index: 0 for the published date, 1 for the last/closing date

    Returns:
        The raw matched date string, or None
    """
    element = link
    for depth in range(MAX_DATE_ANCESTOR_DEPTH):
        if not _is_element(element):
            break
        tag = element.name.lower()
        if depth > 0 and tag in PAGE_CONTAINER_TAGS:
            break

        if tag in ROW_BOUNDARY_TAGS or tag in TEXT_BEARING_TAGS:
            text = element_text(element)
        else:
            text = own_text(element)

        found = extract_date(text, index)
        if found:
            return found
        if tag in ROW_BOUNDARY_TAGS:
            break
        element = element.parent
    return None


def absolute_url(base: str, relative: Optional[str]) -> str:
    """
    Resolve a link against a site's base URL.

    Absolute links pass through, protocol-relative links get https, blank
    links resolve to the base itself.
    """
    if relative is None or not relative.strip():
        return base
    relative = relative.strip()
    if relative.startswith(('http://', 'https://')):
        return relative
    if relative.startswith('//'):
        return 'https:' + relative
    root = base if base.endswith('/') else base + '/'
    return urljoin(root, relative)
