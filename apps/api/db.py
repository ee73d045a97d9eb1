from typing import Iterator

from psycopg import Connection
from psycopg_pool import ConnectionPool

from .settings import settings

# statement_timeout makes the server cancel a hung write instead of
# leaving the request waiting forever.
pool = ConnectionPool(
    conninfo=settings.DATABASE_URL,
    min_size=settings.DB_POOL_MIN_SIZE,
    max_size=settings.DB_POOL_MAX_SIZE,
    timeout=settings.DB_POOL_TIMEOUT,
    kwargs={"options": f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}"},
    open=False,
)

def get_conn() -> Iterator[Connection]:
    """FastAPI dependency: borrow a pooled connection for one request."""
    with pool.connection() as conn:
        yield conn

def db_ok() -> bool:
    try:
        with pool.connection() as conn, conn.cursor() as cur:
            cur.execute('select 1;')
            cur.fetchone()
        return True
    except Exception:
        return False
