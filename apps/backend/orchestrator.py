"""
Scrape orchestrator with single-flight runs and a periodic scheduler
"""
import logging
import asyncio
import threading
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional

from app.config import ScraperSettings, get_settings
from core.net import build_fetcher
from core.pacing import Pacer, build_pacer
from crawler.sources.base import NoticeSource
from crawler.sources.registry import build_default_registry
from pipeline.dedup import NoticeOutcome, NoticeProcessor
from pipeline.notice_store import NoticeStore, get_notice_store

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Counts for one run"""
    total: int = 0
    saved: int = 0
    skipped: int = 0
    errors: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


class ScraperOrchestrator:
    """Runs every source once per run, one at a time, and persists new notices"""

    def __init__(
        self,
        sources: List[NoticeSource],
        store: NoticeStore,
        pacer: Optional[Pacer] = None,
        processor: Optional[NoticeProcessor] = None,
        startup_delay_seconds: float = 3.0,
        interval_seconds: float = 6 * 3600,
    ):
        self.sources = list(sources)
        self.store = store
        self.pacer = pacer or build_pacer()
        self.processor = processor or NoticeProcessor(store)
        self.startup_delay_seconds = startup_delay_seconds
        self.interval_seconds = interval_seconds

        self._run_lock = threading.Lock()
        self.last_result: Optional[RunResult] = None
        self.last_run_at: Optional[datetime] = None

        self.running = False
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        """True while a run is in progress"""
        return self._run_lock.locked()

    async def run_all(self) -> RunResult:
        """
        Scrape all sources once and persist new notices.

        At most one run executes at a time. A call made while a run is in
        progress is dropped (not queued) and returns an all-zero RunResult.
        """
        result = await self.try_run_all()
        return result if result is not None else RunResult()

    async def try_run_all(self) -> Optional[RunResult]:
        """Like run_all, but returns None when the trigger was dropped"""
        if not self._run_lock.acquire(blocking=False):
            logger.warning("[orchestrator] Scraper already running, skipping this trigger")
            return None

        try:
            return await self._run_sources()
        finally:
            self._run_lock.release()

    async def _run_sources(self) -> RunResult:
        result = RunResult()
        started_at = datetime.now(timezone.utc)
        logger.info(f"[orchestrator] Starting scrape run over {len(self.sources)} sources")

        for index, source in enumerate(self.sources):
            if index > 0:
                await self.pacer.wait()

            try:
                notices = await source.fetch_raw()
                result.total += len(notices)
            except Exception as e:
                logger.error(f"[orchestrator] Source {source.name} failed: {e}", exc_info=True)
                result.errors += 1
                continue

            for raw in notices:
                try:
                    outcome = self.processor.process(raw)
                except Exception as e:
                    logger.error(f"[orchestrator] Failed to save notice '{(raw.title or '')[:60]}': {e}")
                    result.errors += 1
                    continue

                if outcome == NoticeOutcome.SAVED:
                    result.saved += 1
                elif outcome == NoticeOutcome.SKIPPED:
                    result.skipped += 1

            logger.info(f"[orchestrator] {source.name}: {len(notices)} notices fetched")

        elapsed = (datetime.now(timezone.utc) - started_at).total_seconds()
        logger.info(
            f"[orchestrator] Run complete in {elapsed:.1f}s: total={result.total}, saved={result.saved}, "
            f"skipped={result.skipped}, errors={result.errors}"
        )
        self.last_result = result
        self.last_run_at = started_at
        return result

    def status(self) -> Dict:
        return {
            'running': self.is_running,
            'scheduler_active': self.running,
            'sources': [source.name for source in self.sources],
            'last_run_at': self.last_run_at.isoformat() if self.last_run_at else None,
            'last_result': self.last_result.to_dict() if self.last_result else None,
        }

    async def scheduler_loop(self):
        """Run once after the startup delay, then every interval"""
        logger.info("[orchestrator] Scheduler started")
        await asyncio.sleep(self.startup_delay_seconds)

        while self.running:
            try:
                await self.run_all()
            except Exception as e:
                logger.error(f"[orchestrator] Scheduler error: {e}", exc_info=True)

            await asyncio.sleep(self.interval_seconds)

        logger.info("[orchestrator] Scheduler stopped")

    async def start(self):
        """Start the scheduler"""
        self.running = True
        self._task = asyncio.create_task(self.scheduler_loop())
        logger.info("[orchestrator] Scheduler task created")

    async def stop(self):
        """Stop the scheduler"""
        self.running = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("[orchestrator] Scheduler stopping...")


def build_orchestrator(
    settings: Optional[ScraperSettings] = None,
    source_names: Optional[List[str]] = None,
    store: Optional[NoticeStore] = None,
    store_kind: Optional[str] = None,
) -> ScraperOrchestrator:
    """
    Wire an orchestrator from settings.

    Sources are resolved before the store is built, so an unknown source
    name fails without touching the database.

    Raises:
        KeyError: if source_names contains an unknown source
        StoreError: if the configured store is unavailable
    """
    settings = settings or get_settings()
    fetcher = build_fetcher(
        timeout_ms=settings.fetch_timeout_ms,
        verify_tls=settings.verify_tls,
        retries=settings.fetch_retries,
        user_agent=settings.user_agent,
    )
    sources = build_default_registry(fetcher).select(source_names)
    if store is None:
        store = get_notice_store(store_kind or settings.store or None)
    return ScraperOrchestrator(
        sources=sources,
        store=store,
        pacer=build_pacer(settings.pacing, settings.source_delay_seconds, settings.sources_per_minute),
        startup_delay_seconds=settings.startup_delay_seconds,
        interval_seconds=settings.schedule_interval_seconds,
    )


# Global instance
_orchestrator: Optional[ScraperOrchestrator] = None


def get_orchestrator(settings: Optional[ScraperSettings] = None) -> ScraperOrchestrator:
    """Get or create orchestrator instance"""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = build_orchestrator(settings)
    return _orchestrator


async def start_scheduler(settings: Optional[ScraperSettings] = None):
    """Start the scrape scheduler (call from FastAPI startup)"""
    settings = settings or get_settings()
    if settings.disable_scheduler:
        logger.info("[orchestrator] Scheduler disabled by GOVTJOBS_DISABLE_SCHEDULER")
        return
    orchestrator = get_orchestrator(settings)
    await orchestrator.start()


async def stop_scheduler():
    """Stop the scrape scheduler (call from FastAPI shutdown)"""
    global _orchestrator
    if _orchestrator:
        await _orchestrator.stop()
