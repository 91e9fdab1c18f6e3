"""
Notice persistence.

Notices are append-only: one row per distinct content hash, first write
wins, never updated. Two stores share one contract:
- PostgresNoticeStore: psycopg2, one connection and commit per operation
- MemoryNoticeStore: process-local, for dry runs and tests
"""
import os
import uuid
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import psycopg2
from psycopg2 import errors as pg_errors
from psycopg2.extras import RealDictCursor

logger = logging.getLogger(__name__)

DEFAULT_NOTICES_TABLE = os.getenv('NOTICES_TABLE', 'job_notices')
NEW_NOTICE_WINDOW = timedelta(hours=24)
DEADLINE_SOON_DAYS = 3

NOTICE_COLUMNS = [
    'id', 'title', 'category', 'state', 'notice_type', 'engineering_branches',
    'source_name', 'source_url', 'apply_url', 'published_date', 'last_date',
    'content_hash', 'fetched_at',
]


class StoreError(Exception):
    """A persistence operation failed"""


class DuplicateNoticeError(StoreError):
    """A notice with the same content hash is already stored"""

    def __init__(self, content_hash: str):
        super().__init__(f"Duplicate content hash: {content_hash}")
        self.content_hash = content_hash


@dataclass
class StoredNotice:
    """A persisted, normalized notice"""
    title: str
    category: str
    state: str
    source_name: str
    source_url: str
    apply_url: str
    content_hash: str
    fetched_at: datetime
    notice_type: Optional[str] = None
    engineering_branches: Optional[str] = None
    published_date: Optional[date] = None
    last_date: Optional[date] = None
    id: str = ""

    def is_new(self, now: Optional[datetime] = None) -> bool:
        """Fetched within the last 24 hours"""
        now = now or datetime.now(timezone.utc)
        fetched_at = self.fetched_at
        if fetched_at.tzinfo is None:
            fetched_at = fetched_at.replace(tzinfo=timezone.utc)
        return now - fetched_at <= NEW_NOTICE_WINDOW

    def is_deadline_soon(self, today: Optional[date] = None) -> bool:
        """Last date is today or within the next 3 days"""
        if self.last_date is None:
            return False
        today = today or date.today()
        return today <= self.last_date <= today + timedelta(days=DEADLINE_SOON_DAYS)

    @property
    def source_domain(self) -> str:
        """Host of source_url without a leading www."""
        host = urlparse(self.source_url or "").hostname or ""
        return host[4:] if host.startswith('www.') else host

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key in ('published_date', 'last_date', 'fetched_at'):
            if data[key] is not None:
                data[key] = data[key].isoformat()
        data['is_new'] = self.is_new()
        data['is_deadline_soon'] = self.is_deadline_soon()
        data['source_domain'] = self.source_domain
        return data


class NoticeStore(ABC):
    """Append/query store with a unique content hash"""

    @abstractmethod
    def exists_by_content_hash(self, content_hash: str) -> bool:
        pass

    @abstractmethod
    def insert(self, notice: StoredNotice) -> StoredNotice:
        """
        Persist a notice and return it with its id assigned.

        Raises:
            DuplicateNoticeError: the content hash is already stored
            StoreError: any other persistence failure
        """
        pass

    @abstractmethod
    def get_by_id(self, notice_id: str) -> Optional[StoredNotice]:
        pass

    @abstractmethod
    def count_fetched_since(self, since: datetime) -> int:
        pass

    @abstractmethod
    def distinct_categories(self) -> List[str]:
        pass

    @abstractmethod
    def distinct_states(self) -> List[str]:
        pass


class MemoryNoticeStore(NoticeStore):
    """Thread-safe in-process store"""

    def __init__(self):
        self._by_id: Dict[str, StoredNotice] = {}
        self._hashes: Dict[str, str] = {}
        self._lock = threading.Lock()

    def exists_by_content_hash(self, content_hash: str) -> bool:
        with self._lock:
            return content_hash in self._hashes

    def insert(self, notice: StoredNotice) -> StoredNotice:
        with self._lock:
            if notice.content_hash in self._hashes:
                raise DuplicateNoticeError(notice.content_hash)
            notice.id = notice.id or str(uuid.uuid4())
            self._by_id[notice.id] = notice
            self._hashes[notice.content_hash] = notice.id
            return notice

    def get_by_id(self, notice_id: str) -> Optional[StoredNotice]:
        with self._lock:
            return self._by_id.get(notice_id)

    def count_fetched_since(self, since: datetime) -> int:
        with self._lock:
            return sum(1 for notice in self._by_id.values() if notice.fetched_at >= since)

    def distinct_categories(self) -> List[str]:
        with self._lock:
            return sorted({notice.category for notice in self._by_id.values()})

    def distinct_states(self) -> List[str]:
        with self._lock:
            return sorted({notice.state for notice in self._by_id.values()})

    def all(self) -> List[StoredNotice]:
        with self._lock:
            return list(self._by_id.values())

    def __len__(self):
        with self._lock:
            return len(self._by_id)


class PostgresNoticeStore(NoticeStore):
    """PostgreSQL store. Each call opens its own connection and commits on its own."""

    def __init__(self, db_url: str, table: Optional[str] = None):
        """
        Args:
            db_url: PostgreSQL connection string
            table: Table name (default: NOTICES_TABLE env var or 'job_notices')
        """
        self.db_url = db_url
        self.table = table or DEFAULT_NOTICES_TABLE

    def _get_db_conn(self):
        """Get database connection"""
        try:
            return psycopg2.connect(self.db_url, connect_timeout=5)
        except psycopg2.Error as e:
            logger.error(f"[store] Failed to connect to database: {e}")
            raise StoreError(f"Connection failed: {e}") from e

    def ensure_schema(self):
        """Create the notices table and its indexes if missing"""
        conn = self._get_db_conn()
        try:
            with conn.cursor() as cur:
                cur.execute(f"""
                    CREATE TABLE IF NOT EXISTS {self.table} (
                        id UUID PRIMARY KEY,
                        title TEXT NOT NULL,
                        category VARCHAR(20) NOT NULL,
                        state VARCHAR(100) NOT NULL,
                        notice_type VARCHAR(30),
                        engineering_branches VARCHAR(100),
                        source_name VARCHAR(200) NOT NULL,
                        source_url TEXT,
                        apply_url TEXT,
                        published_date DATE,
                        last_date DATE,
                        content_hash CHAR(64) NOT NULL UNIQUE,
                        fetched_at TIMESTAMPTZ NOT NULL
                    )
                """)
                cur.execute(f"CREATE INDEX IF NOT EXISTS idx_{self.table}_category ON {self.table} (category)")
                cur.execute(f"CREATE INDEX IF NOT EXISTS idx_{self.table}_state ON {self.table} (state)")
                cur.execute(f"CREATE INDEX IF NOT EXISTS idx_{self.table}_fetched_at ON {self.table} (fetched_at)")
            conn.commit()
            logger.info(f"[store] Ensured table {self.table} exists")
        except psycopg2.Error as e:
            conn.rollback()
            raise StoreError(f"Schema creation failed: {e}") from e
        finally:
            conn.close()

    def _row_to_notice(self, row: Dict[str, Any]) -> StoredNotice:
        data = dict(row)
        data['id'] = str(data['id'])
        return StoredNotice(**data)

    def exists_by_content_hash(self, content_hash: str) -> bool:
        conn = self._get_db_conn()
        try:
            with conn.cursor() as cur:
                cur.execute(f"SELECT 1 FROM {self.table} WHERE content_hash = %s LIMIT 1", (content_hash,))
                return cur.fetchone() is not None
        except psycopg2.Error as e:
            raise StoreError(f"Hash lookup failed: {e}") from e
        finally:
            conn.close()

    def insert(self, notice: StoredNotice) -> StoredNotice:
        notice.id = notice.id or str(uuid.uuid4())
        values = [getattr(notice, column) for column in NOTICE_COLUMNS]

        conn = self._get_db_conn()
        try:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    INSERT INTO {self.table} ({', '.join(NOTICE_COLUMNS)})
                    VALUES ({', '.join(['%s'] * len(NOTICE_COLUMNS))})
                    """,
                    values
                )
            conn.commit()
            logger.debug(f"[store] Inserted notice {notice.id} into {self.table}")
            return notice
        except pg_errors.UniqueViolation as e:
            conn.rollback()
            logger.debug(f"[store] Duplicate notice {notice.content_hash[:12]}: {e}")
            raise DuplicateNoticeError(notice.content_hash) from e
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"[store] Error inserting notice: {e}")
            raise StoreError(f"Insert failed: {e}") from e
        finally:
            conn.close()

    def get_by_id(self, notice_id: str) -> Optional[StoredNotice]:
        conn = self._get_db_conn()
        try:
            with conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(
                    f"SELECT {', '.join(NOTICE_COLUMNS)} FROM {self.table} WHERE id = %s",
                    (notice_id,)
                )
                row = cur.fetchone()
                return self._row_to_notice(row) if row else None
        except psycopg2.Error as e:
            raise StoreError(f"Lookup failed: {e}") from e
        finally:
            conn.close()

    def count_fetched_since(self, since: datetime) -> int:
        conn = self._get_db_conn()
        try:
            with conn.cursor() as cur:
                cur.execute(f"SELECT COUNT(*) FROM {self.table} WHERE fetched_at >= %s", (since,))
                return cur.fetchone()[0]
        except psycopg2.Error as e:
            raise StoreError(f"Count failed: {e}") from e
        finally:
            conn.close()

    def _distinct(self, column: str) -> List[str]:
        conn = self._get_db_conn()
        try:
            with conn.cursor() as cur:
                cur.execute(f"SELECT DISTINCT {column} FROM {self.table} ORDER BY {column}")
                return [row[0] for row in cur.fetchall()]
        except psycopg2.Error as e:
            raise StoreError(f"Distinct {column} failed: {e}") from e
        finally:
            conn.close()

    def distinct_categories(self) -> List[str]:
        return self._distinct('category')

    def distinct_states(self) -> List[str]:
        return self._distinct('state')


def get_notice_store(kind: Optional[str] = None, db_url: Optional[str] = None) -> NoticeStore:
    """
    Build the configured store.

    Args:
        kind: 'postgres' or 'memory' (default: GOVTJOBS_STORE env var, else
            postgres when a database URL is configured)
        db_url: PostgreSQL connection string (default: from app.db_config)
    """
    kind = (kind or os.getenv('GOVTJOBS_STORE', '')).lower()
    if kind == 'memory':
        return MemoryNoticeStore()

    if db_url is None:
        from app.db_config import db_config
        db_url = db_config.get_connection_string()

    if not db_url:
        if kind == 'postgres':
            raise StoreError("GOVTJOBS_STORE=postgres but DATABASE_URL is not set")
        logger.warning("[store] DATABASE_URL not set, using in-memory notice store")
        return MemoryNoticeStore()

    store = PostgresNoticeStore(db_url)
    store.ensure_schema()
    return store
