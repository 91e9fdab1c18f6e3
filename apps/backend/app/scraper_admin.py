"""
Scraper management endpoints for admin.
"""
import os
import logging
import secrets
from typing import Any, Dict, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Header, HTTPException, Query
from pydantic import BaseModel

from orchestrator import RunResult, ScraperOrchestrator, get_orchestrator

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin/scrape", tags=["scraper"])


class RunCounts(BaseModel):
    total: int
    saved: int
    skipped: int
    errors: int


class RunResponse(BaseModel):
    status: str
    data: Optional[RunCounts] = None
    error: Optional[str] = None


class StatusResponse(BaseModel):
    status: str
    data: Dict[str, Any]
    error: Optional[str] = None


def require_admin(x_admin_token: Optional[str] = Header(None)):
    """
    Dependency to gate scraper admin routes.

    Open in dev mode. Elsewhere the X-Admin-Token header must match
    GOVTJOBS_ADMIN_TOKEN; without a configured token the routes are closed.
    """
    env = os.getenv("GOVTJOBS_ENV", "dev").lower()
    if env == "dev":
        return

    admin_token = os.getenv("GOVTJOBS_ADMIN_TOKEN")
    if admin_token and x_admin_token and secrets.compare_digest(x_admin_token, admin_token):
        return
    raise HTTPException(status_code=403, detail="Admin routes require dev mode or a valid admin token")


def get_scraper() -> ScraperOrchestrator:
    """Dependency returning the process-wide orchestrator"""
    return get_orchestrator()


async def _run_in_background(scraper: ScraperOrchestrator):
    result = await scraper.run_all()
    logger.info(f"[scraper_admin] Background run finished: {result.to_dict()}")


@router.post("/run", response_model=RunResponse)
async def run_scrape(
    background_tasks: BackgroundTasks,
    _: None = Depends(require_admin),
    background: bool = Query(False, description="Return immediately and run after the response"),
    scraper: ScraperOrchestrator = Depends(get_scraper),
):
    """
    Trigger a scrape of every source.

    A trigger while a run is in progress is dropped: the response has
    status "already_running" and zero counts.
    """
    if scraper.is_running:
        logger.warning("[scraper_admin] Manual trigger ignored, run in progress")
        return {"status": "already_running", "data": RunResult().to_dict(), "error": None}

    if background:
        background_tasks.add_task(_run_in_background, scraper)
        return {"status": "scheduled", "data": None, "error": None}

    result = await scraper.try_run_all()
    if result is None:
        return {"status": "already_running", "data": RunResult().to_dict(), "error": None}
    return {"status": "ok", "data": result.to_dict(), "error": None}


@router.get("/status", response_model=StatusResponse)
async def scrape_status(
    _: None = Depends(require_admin),
    scraper: ScraperOrchestrator = Depends(get_scraper),
):
    """Current run state and the counts of the last completed run"""
    return {"status": "ok", "data": scraper.status(), "error": None}
