from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from dotenv import load_dotenv
from contextlib import asynccontextmanager
import logging
import traceback

load_dotenv()

from app.config import Capabilities, get_env_presence, get_settings
from app.notices import router as notices_router
from app.scraper_admin import router as scraper_admin_router

settings = get_settings()

logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application lifecycle events."""
    logger.info(f"[govtjobs] env: GOVTJOBS_ENV={settings.env}")

    # Start scrape scheduler
    from orchestrator import start_scheduler, stop_scheduler
    try:
        await start_scheduler(settings)
    except Exception as e:
        logger.error(f"[orchestrator] Failed to start scheduler: {e}")

    yield

    # Shutdown
    await stop_scheduler()


app = FastAPI(title="Govt Job Notices API", version="0.1.0", lifespan=lifespan)


# Error masking middleware
@app.middleware("http")
async def error_masking_middleware(request: Request, call_next):
    """Mask detailed errors in production; show full errors in dev."""
    try:
        return await call_next(request)
    except HTTPException:
        raise
    except Exception as e:
        is_dev = settings.env.lower() == "dev"

        logger.error(f"Unhandled error: {str(e)}")
        if is_dev:
            logger.error(traceback.format_exc())
            return JSONResponse(
                status_code=500,
                content={"status": "error", "error": str(e), "traceback": traceback.format_exc()}
            )
        return JSONResponse(
            status_code=500,
            content={"status": "error", "error": "An internal error occurred. Please try again later."}
        )


app.include_router(scraper_admin_router)
app.include_router(notices_router)


@app.get("/api/healthz")
async def healthz():
    return Capabilities.get_status(settings)


@app.get("/api/env")
async def env_presence():
    """Which configuration variables are set (values are never returned)"""
    return get_env_presence()
