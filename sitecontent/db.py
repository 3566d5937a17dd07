"""PostgreSQL helpers: pooled connections and timed, logged queries."""

import logging
import time
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, List, Optional

import psycopg2
import psycopg2.extras
from psycopg2.pool import ThreadedConnectionPool

from sitecontent.config import DEFAULT_SLOW_QUERY_MS

logger = logging.getLogger(__name__)
_query_logger = logging.getLogger("sitecontent.db.query")


def create_pool(dsn: str, minconn: int = 1, maxconn: int = 10) -> ThreadedConnectionPool:
    """Open a thread-safe pool; route handlers run in FastAPI's threadpool."""
    pool = ThreadedConnectionPool(minconn, maxconn, dsn=dsn)
    logger.info("Database pool opened", extra={"minconn": minconn, "maxconn": maxconn})
    return pool


@contextmanager
def connection(pool: ThreadedConnectionPool) -> Iterator[Any]:
    """Borrow a connection for one unit of work and always return it."""
    conn = pool.getconn()
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        pool.putconn(conn)


def _redact_params(params: Optional[Iterable[Any]]) -> Optional[List[Any]]:
    if params is None:
        return None
    redacted: List[Any] = []
    for val in params:
        if isinstance(val, (bytes, bytearray)):
            redacted.append(f"<bytes:{len(val)}>")
        elif isinstance(val, str) and len(val) > 80:
            redacted.append(f"{val[:40]}…{val[-10:]}")
        else:
            redacted.append(val)
    return redacted


def _log_query(
    query_name: str,
    params: Optional[Iterable[Any]],
    elapsed_ms: float,
    rowcount: int,
    slow_ms: float,
) -> None:
    message = {
        "query": query_name,
        "ms": round(elapsed_ms, 2),
        "rowcount": rowcount,
        "params": _redact_params(params),
    }
    if elapsed_ms >= slow_ms:
        _query_logger.warning("db_slow_query=%s", message)
    else:
        _query_logger.debug("db_query=%s", message)


def fetch_one(
    conn,
    sql: str,
    params: Optional[Iterable[Any]] = None,
    query_name: str = "unnamed",
    slow_ms: float = DEFAULT_SLOW_QUERY_MS,
) -> Optional[dict]:
    start = time.perf_counter()
    with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
        cur.execute(sql, params or [])
        row = cur.fetchone()
        rowcount = cur.rowcount
    _log_query(query_name, params, (time.perf_counter() - start) * 1000, rowcount, slow_ms)
    return dict(row) if row else None


def fetch_all(
    conn,
    sql: str,
    params: Optional[Iterable[Any]] = None,
    query_name: str = "unnamed",
    slow_ms: float = DEFAULT_SLOW_QUERY_MS,
) -> List[dict]:
    start = time.perf_counter()
    with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
        cur.execute(sql, params or [])
        rows = [dict(r) for r in cur.fetchall()]
        rowcount = cur.rowcount
    _log_query(query_name, params, (time.perf_counter() - start) * 1000, rowcount, slow_ms)
    return rows
