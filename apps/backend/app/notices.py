"""
Read-only notice lookups.
"""
import uuid
import logging

from fastapi import APIRouter, Depends, HTTPException

from app.scraper_admin import get_scraper
from orchestrator import ScraperOrchestrator
from pipeline.notice_store import NoticeStore, StoreError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["notices"])


def get_store(scraper: ScraperOrchestrator = Depends(get_scraper)) -> NoticeStore:
    return scraper.store


@router.get("/notices/{notice_id}")
def get_notice(notice_id: str, store: NoticeStore = Depends(get_store)):
    try:
        uuid.UUID(notice_id)
    except ValueError:
        raise HTTPException(status_code=404, detail="Notice not found")

    try:
        notice = store.get_by_id(notice_id)
    except StoreError as e:
        logger.error(f"[notices] Lookup failed for {notice_id}: {e}")
        raise HTTPException(status_code=503, detail="Notice store unavailable")

    if notice is None:
        raise HTTPException(status_code=404, detail="Notice not found")
    return {"status": "ok", "data": notice.to_dict(), "error": None}


@router.get("/categories")
def get_categories(store: NoticeStore = Depends(get_store)):
    try:
        return {"status": "ok", "data": store.distinct_categories(), "error": None}
    except StoreError as e:
        logger.error(f"[notices] Category lookup failed: {e}")
        raise HTTPException(status_code=503, detail="Notice store unavailable")


@router.get("/states")
def get_states(store: NoticeStore = Depends(get_store)):
    try:
        return {"status": "ok", "data": store.distinct_states(), "error": None}
    except StoreError as e:
        logger.error(f"[notices] State lookup failed: {e}")
        raise HTTPException(status_code=503, detail="Notice store unavailable")
