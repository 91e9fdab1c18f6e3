import os
import logging
from dataclasses import dataclass
from typing import Optional

import psycopg2

from app.db_config import db_config

logger = logging.getLogger(__name__)


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).lower() in ("1", "true", "yes")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"[config] Invalid integer for {name}: {value!r}, using {default}")
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"[config] Invalid number for {name}: {value!r}, using {default}")
        return default


@dataclass
class ScraperSettings:
    """Scraper configuration, read from GOVTJOBS_* environment variables"""
    env: str = "dev"
    log_level: str = "INFO"
    fetch_timeout_ms: int = 10000
    user_agent: Optional[str] = None
    verify_tls: bool = False
    fetch_retries: int = 0
    pacing: str = "fixed"
    source_delay_seconds: float = 1.0
    sources_per_minute: float = 30.0
    schedule_interval_hours: float = 6.0
    startup_delay_seconds: float = 3.0
    disable_scheduler: bool = False
    store: str = ""

    @classmethod
    def from_env(cls) -> "ScraperSettings":
        return cls(
            env=os.getenv("GOVTJOBS_ENV", "dev"),
            log_level=os.getenv("GOVTJOBS_LOG_LEVEL", "INFO").upper(),
            fetch_timeout_ms=_env_int("GOVTJOBS_FETCH_TIMEOUT_MS", 10000),
            user_agent=os.getenv("GOVTJOBS_USER_AGENT") or None,
            verify_tls=_env_bool("GOVTJOBS_VERIFY_TLS", False),
            fetch_retries=_env_int("GOVTJOBS_FETCH_RETRIES", 0),
            pacing=os.getenv("GOVTJOBS_PACING", "fixed").lower(),
            source_delay_seconds=_env_float("GOVTJOBS_SOURCE_DELAY_SECONDS", 1.0),
            sources_per_minute=_env_float("GOVTJOBS_SOURCES_PER_MINUTE", 30.0),
            schedule_interval_hours=_env_float("GOVTJOBS_SCHEDULE_INTERVAL_HOURS", 6.0),
            startup_delay_seconds=_env_float("GOVTJOBS_STARTUP_DELAY_SECONDS", 3.0),
            disable_scheduler=_env_bool("GOVTJOBS_DISABLE_SCHEDULER", False),
            store=os.getenv("GOVTJOBS_STORE", "").lower(),
        )

    @property
    def schedule_interval_seconds(self) -> float:
        return self.schedule_interval_hours * 3600


class Capabilities:
    @staticmethod
    def is_db_enabled() -> bool:
        return db_config.is_db_enabled

    @staticmethod
    def check_db_connection() -> bool:
        """Verify database connection with a trivial query"""
        conn_params = db_config.get_connection_params()
        if not conn_params:
            return False

        try:
            # Very short timeout for health checks
            conn = psycopg2.connect(**conn_params, connect_timeout=1)
            cursor = conn.cursor()
            cursor.execute("SELECT 1")
            cursor.fetchone()
            cursor.close()
            conn.close()
            return True
        except psycopg2.Error:
            return False

    @classmethod
    def get_status(cls, settings: "ScraperSettings") -> dict:
        db = cls.check_db_connection()
        scheduler = not settings.disable_scheduler

        status = "green" if db and scheduler else "amber"
        return {
            "status": status,
            "components": {
                "db": db,
                "scheduler": scheduler,
            },
            "env": settings.env,
        }


def get_settings() -> ScraperSettings:
    return ScraperSettings.from_env()


def get_env_presence() -> dict:
    known_vars = [
        "GOVTJOBS_ENV",
        "DATABASE_URL",
        "GOVTJOBS_STORE",
        "GOVTJOBS_LOG_LEVEL",
        "GOVTJOBS_FETCH_TIMEOUT_MS",
        "GOVTJOBS_USER_AGENT",
        "GOVTJOBS_VERIFY_TLS",
        "GOVTJOBS_FETCH_RETRIES",
        "GOVTJOBS_PACING",
        "GOVTJOBS_SOURCE_DELAY_SECONDS",
        "GOVTJOBS_SOURCES_PER_MINUTE",
        "GOVTJOBS_SCHEDULE_INTERVAL_HOURS",
        "GOVTJOBS_STARTUP_DELAY_SECONDS",
        "GOVTJOBS_DISABLE_SCHEDULER",
        "GOVTJOBS_ADMIN_TOKEN",
    ]

    return {var: bool(os.getenv(var)) for var in known_vars}
