"""
Normalization and deduplication of scraped notices.

Each RawNotice is turned into a canonical StoredNotice and written only if
its content hash is new. Every notice is its own unit of work: a failure
on one never affects another.
"""
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from core.extraction_heuristics import normalize_title_for_display
from core.job_categorizer import categorize_notice_type, infer_engineering_branches
from core.normalize import content_hash, norm_category, norm_state
from crawler.sources.base import RawNotice

from .notice_store import DuplicateNoticeError, NoticeStore, StoredNotice

logger = logging.getLogger(__name__)


class NoticeOutcome(str, Enum):
    SAVED = "saved"
    SKIPPED = "skipped"
    IGNORED = "ignored"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_stored_notice(raw: RawNotice, fetched_at: datetime) -> StoredNotice:
    """Canonical form of a raw notice"""
    title = normalize_title_for_display(raw.title)
    return StoredNotice(
        title=title,
        category=norm_category(raw.category),
        state=norm_state(raw.state),
        notice_type=raw.notice_type or categorize_notice_type(title),
        engineering_branches=raw.engineering_branches or infer_engineering_branches(title),
        source_name=raw.source_name,
        source_url=raw.source_url,
        apply_url=raw.apply_url,
        published_date=raw.published_date,
        last_date=raw.last_date,
        content_hash=content_hash(raw.title, raw.source_name),
        fetched_at=fetched_at,
    )


class NoticeProcessor:
    """Check-then-insert of single notices against a store"""

    def __init__(self, store: NoticeStore, clock: Optional[Callable[[], datetime]] = None):
        self.store = store
        self.clock = clock or _utcnow

    def process(self, raw: RawNotice) -> NoticeOutcome:
        """
        Save a notice unless it is blank or already stored.

        A duplicate reported by the store on insert (another writer got there
        between the lookup and the insert) is a skip, not an error.

        Raises:
            StoreError: any persistence failure other than a duplicate
        """
        if not raw.title or not raw.title.strip():
            return NoticeOutcome.IGNORED

        notice_hash = content_hash(raw.title, raw.source_name)
        if self.store.exists_by_content_hash(notice_hash):
            return NoticeOutcome.SKIPPED

        try:
            saved = self.store.insert(to_stored_notice(raw, self.clock()))
        except DuplicateNoticeError:
            logger.debug(f"[dedup] Concurrent duplicate skipped: {notice_hash[:12]}")
            return NoticeOutcome.SKIPPED

        logger.debug(f"[dedup] Saved notice {saved.id}: {saved.title[:60]}")
        return NoticeOutcome.SAVED
