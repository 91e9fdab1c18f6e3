"""
Tests for notice normalization and deduplication.
"""
import pytest
from datetime import date, datetime, timezone
from unittest.mock import MagicMock

from core.normalize import content_hash
from crawler.sources.base import RawNotice
from pipeline.dedup import NoticeOutcome, NoticeProcessor, to_stored_notice
from pipeline.notice_store import DuplicateNoticeError, MemoryNoticeStore, StoreError

FIXED_NOW = datetime(2025, 3, 10, 6, 30, tzinfo=timezone.utc)


def raw_notice(title="SSC CGL 2025 Recruitment Notification", source_name="SSC", **overrides):
    fields = dict(
        title=title,
        apply_url="https://sscnr.nic.in/cgl.pdf",
        source_name=source_name,
        source_url="https://ssc.gov.in",
        category="ssc",
        state="",
    )
    fields.update(overrides)
    return RawNotice(**fields)


@pytest.fixture
def store():
    return MemoryNoticeStore()


@pytest.fixture
def processor(store):
    return NoticeProcessor(store, clock=lambda: FIXED_NOW)


class TestToStoredNotice:
    def test_ssc_cgl_scenario(self):
        stored = to_stored_notice(raw_notice(), FIXED_NOW)

        assert stored.title == "SSC CGL 2025 Recruitment Notification"
        assert stored.category == "SSC"
        assert stored.state == "Central"
        assert stored.notice_type == "RECRUITMENT"
        assert stored.engineering_branches is None
        assert stored.content_hash == content_hash("SSC CGL 2025 Recruitment Notification", "SSC")
        assert stored.fetched_at == FIXED_NOW

    def test_junior_engineer_scenario(self):
        stored = to_stored_notice(
            raw_notice("Junior Engineer (Civil) Recruitment 2025", "RRB", category="Railway"),
            FIXED_NOW,
        )
        assert stored.category == "RAILWAYS"
        assert stored.notice_type == "RECRUITMENT"
        assert stored.engineering_branches == "CIVIL"

    def test_adapter_values_are_kept(self):
        stored = to_stored_notice(
            raw_notice(notice_type="RESULT", engineering_branches="CSE", state="tn",
                       published_date=date(2025, 3, 1), last_date=date(2025, 3, 31)),
            FIXED_NOW,
        )
        assert stored.notice_type == "RESULT"
        assert stored.engineering_branches == "CSE"
        assert stored.state == "Tamil Nadu"
        assert stored.published_date == date(2025, 3, 1)
        assert stored.last_date == date(2025, 3, 31)

    def test_title_is_display_normalized(self):
        stored = to_stored_notice(raw_notice("Latest:   Stenographer  Grade C"), FIXED_NOW)
        assert stored.title == "Stenographer Grade C"


class TestNoticeProcessor:
    def test_saves_new_notice(self, processor, store):
        assert processor.process(raw_notice()) == NoticeOutcome.SAVED
        assert len(store) == 1
        assert store.all()[0].fetched_at == FIXED_NOW

    def test_same_batch_twice_is_idempotent(self, processor, store):
        batch = [raw_notice(), raw_notice("Junior Engineer (Civil) Recruitment 2025")]

        first = [processor.process(raw) for raw in batch]
        second = [processor.process(raw) for raw in batch]

        assert first == [NoticeOutcome.SAVED, NoticeOutcome.SAVED]
        assert second == [NoticeOutcome.SKIPPED, NoticeOutcome.SKIPPED]
        assert len(store) == 2

    def test_case_and_whitespace_variants_are_duplicates(self, processor, store):
        processor.process(raw_notice())
        variant = raw_notice("  ssc cgl 2025   RECRUITMENT notification ", " SSC ")
        assert processor.process(variant) == NoticeOutcome.SKIPPED
        assert len(store) == 1

    @pytest.mark.parametrize("title", ["", "   ", None])
    def test_blank_title_is_ignored(self, processor, store, title):
        assert processor.process(raw_notice(title)) == NoticeOutcome.IGNORED
        assert len(store) == 0

    def test_racing_duplicate_is_skipped(self):
        store = MagicMock()
        store.exists_by_content_hash.return_value = False
        store.insert.side_effect = DuplicateNoticeError("a" * 64)

        assert NoticeProcessor(store).process(raw_notice()) == NoticeOutcome.SKIPPED

    def test_store_failure_propagates(self):
        store = MagicMock()
        store.exists_by_content_hash.return_value = False
        store.insert.side_effect = StoreError("disk full")

        with pytest.raises(StoreError):
            NoticeProcessor(store).process(raw_notice())
