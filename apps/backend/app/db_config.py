"""
Database configuration module.
Reads DATABASE_URL (a PostgreSQL connection string) and logs it masked.
"""

import os
import logging
from typing import Optional
from urllib.parse import urlparse, unquote

logger = logging.getLogger(__name__)


class DBConfig:
    """Database configuration from DATABASE_URL"""

    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url if database_url is not None else os.getenv("DATABASE_URL")

        if self.database_url:
            logger.info(f"[db_config] DATABASE_URL configured: {self.masked_url()}")
        else:
            logger.debug("[db_config] DATABASE_URL not set")

    @property
    def is_db_enabled(self) -> bool:
        return bool(self.database_url)

    def masked_url(self) -> str:
        """The connection string with its password replaced by ***"""
        if not self.database_url:
            return ""
        try:
            parsed = urlparse(self.database_url)
        except ValueError as e:
            return f"(unparseable: {e})"
        credentials = f"{parsed.username}:***@" if parsed.username else ""
        return f"{parsed.scheme}://{credentials}{parsed.hostname}:{parsed.port or 5432}{parsed.path}"

    def get_connection_string(self) -> Optional[str]:
        return self.database_url or None

    def get_connection_params(self) -> Optional[dict]:
        """
        Connection parameters for psycopg2.connect(**params).
        Returns None when DATABASE_URL is missing or has no host.
        """
        if not self.database_url:
            return None

        try:
            parsed = urlparse(self.database_url)
        except ValueError as e:
            logger.error(f"[db_config] Failed to parse DATABASE_URL: {e}")
            return None

        if not parsed.hostname:
            return None

        params = {
            "host": parsed.hostname,
            "port": parsed.port or 5432,
            "database": parsed.path.lstrip('/') or 'postgres',
            "user": parsed.username or 'postgres',
        }
        # URL-decode to handle special characters
        if parsed.password:
            params["password"] = unquote(parsed.password)
        return params


# Global instance
db_config = DBConfig()
