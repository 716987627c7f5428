"""
Database access layer.

A Database runs exactly one parameterized statement per call and returns the
resulting rows as plain dicts. SQL is written with '?' placeholders; the
PostgreSQL backend rewrites them for psycopg2. Driver exceptions are wrapped
into StoreError / ConstraintError so handlers never see driver types.
"""
import os
import socket
import sqlite3
import logging
import threading
from urllib.parse import urlsplit, unquote, parse_qsl

from flask import current_app
import psycopg2
from psycopg2.extras import RealDictCursor
from psycopg2.pool import ThreadedConnectionPool

from .errors import ConstraintError, StoreError

EXTENSION_KEY = "platform_db"
SQLITE_PREFIX = "sqlite:///"
POSTGRES_SCHEMES = ("postgres://", "postgresql://")
# ids are stored as signed 64-bit integers
MAX_ROW_ID = 2 ** 63 - 1


class Database:
    """Interface over "execute one statement, return rows"."""
    dialect = None

    def query(self, sql: str, params=()) -> list:
        raise NotImplementedError

    def query_one(self, sql: str, params=()):
        rows = self.query(sql, params)
        return rows[0] if rows else None

    def add_column_if_missing(self, table: str, column: str, ddl_type: str) -> None:
        raise NotImplementedError

    def describe(self) -> str:
        """Label safe for logs (never includes credentials)."""
        return self.dialect or "unknown"

    def close(self) -> None:
        pass


class SQLiteDatabase(Database):
    """SQLite backend: one short-lived connection per statement."""
    dialect = "sqlite"

    def __init__(self, path: str):
        self.path = path
        self._shared = None
        self._lock = threading.Lock()
        if path == ":memory:":
            # A memory database lives as long as its connection, so keep one
            self._shared = self._connect()
        else:
            os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)

    def _connect(self):
        conn = sqlite3.connect(self.path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def query(self, sql: str, params=()) -> list:
        if self._shared is not None:
            with self._lock:
                return self._run(self._shared, sql, params)

        try:
            conn = self._connect()
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        try:
            return self._run(conn, sql, params)
        finally:
            conn.close()

    def _run(self, conn, sql, params):
        try:
            c = conn.cursor()
            c.execute(sql, tuple(params))
            # RETURNING rows must be read before the commit
            rows = [dict(row) for row in c.fetchall()]
            conn.commit()
            return rows
        except sqlite3.IntegrityError as e:
            conn.rollback()
            raise ConstraintError(str(e)) from e
        except (sqlite3.Error, OverflowError) as e:
            # OverflowError: an int parameter wider than SQLite's INTEGER
            conn.rollback()
            raise StoreError(str(e)) from e

    def add_column_if_missing(self, table: str, column: str, ddl_type: str) -> None:
        existing = {row["name"] for row in self.query(f"PRAGMA table_info({table})")}
        if column not in existing:
            self.query(f"ALTER TABLE {table} ADD COLUMN {column} {ddl_type}")
            logging.info(f"🔧 Added column {table}.{column}")

    def describe(self) -> str:
        return f"sqlite:{self.path}"

    def close(self) -> None:
        if self._shared is not None:
            self._shared.close()
            self._shared = None


def resolve_ipv4(host: str, port: int):
    """Return the first IPv4 address for host, or None if the lookup fails."""
    try:
        infos = socket.getaddrinfo(host, port, socket.AF_INET, socket.SOCK_STREAM)
    except OSError as e:
        logging.warning(f"IPv4 lookup failed for DB host, will try hostname directly: {e}")
        return None
    if not infos:
        return None
    address = infos[0][4][0]
    logging.info(f"Resolved DB host {host} -> {address} (IPv4)")
    return address


def connection_kwargs(url: str, prefer_ipv4: bool = True, sslmode: str = "require") -> dict:
    """
    Turn a postgres:// URL into psycopg2.connect() keyword arguments.

    When prefer_ipv4 is set the host is resolved to an IPv4 address and passed
    as hostaddr, keeping host for TLS. Query-string options (e.g. sslmode)
    override the defaults. An unparseable URL falls back to the raw DSN.
    """
    try:
        parsed = urlsplit(url)
        host = parsed.hostname
        port = parsed.port or 5432
    except ValueError as e:
        logging.warning(f"Falling back to connection string for the PG pool: {e}")
        return {"dsn": url, "sslmode": sslmode}

    if not host:
        logging.warning("DATABASE_URL has no host; falling back to connection string for the PG pool")
        return {"dsn": url, "sslmode": sslmode}

    kwargs = {
        "host": host,
        "port": port,
        "user": unquote(parsed.username) if parsed.username else None,
        "password": unquote(parsed.password) if parsed.password else None,
        "dbname": parsed.path.lstrip("/") or None,
        "sslmode": sslmode,
    }
    kwargs.update(dict(parse_qsl(parsed.query)))

    if prefer_ipv4:
        address = resolve_ipv4(host, port)
        if address:
            kwargs["hostaddr"] = address

    return {key: value for key, value in kwargs.items() if value is not None}


def to_pyformat(sql: str) -> str:
    """Rewrite '?' placeholders into psycopg2's '%s' style."""
    return sql.replace("%", "%%").replace("?", "%s")


class PostgresDatabase(Database):
    """PostgreSQL backend over a psycopg2 threaded connection pool."""
    dialect = "postgres"

    def __init__(self, url: str, minconn: int = 0, maxconn: int = 10,
                 prefer_ipv4: bool = True, sslmode: str = "require"):
        self.kwargs = connection_kwargs(url, prefer_ipv4=prefer_ipv4, sslmode=sslmode)
        self.minconn = minconn
        self.maxconn = maxconn
        self.pool = None
        self._pool_lock = threading.Lock()
        logging.info(f"Connecting to DB host: {self.kwargs.get('host', '<dsn>')}")
        try:
            self._get_pool()
        except StoreError as e:
            # minconn > 0 connects eagerly; retry on the first query instead
            logging.error(f"❌ Could not open the DB pool, will retry on first query: {e.message}")

    def _get_pool(self) -> ThreadedConnectionPool:
        with self._pool_lock:
            if self.pool is None:
                try:
                    self.pool = ThreadedConnectionPool(self.minconn, self.maxconn, **self.kwargs)
                except psycopg2.Error as e:
                    raise StoreError(str(e).strip()) from e
            return self.pool

    def query(self, sql: str, params=()) -> list:
        pool = self._get_pool()
        try:
            conn = pool.getconn()
        except psycopg2.Error as e:
            raise StoreError(str(e)) from e

        try:
            with conn:
                with conn.cursor(cursor_factory=RealDictCursor) as cur:
                    cur.execute(to_pyformat(sql), tuple(params))
                    if cur.description is None:
                        return []
                    return [dict(row) for row in cur.fetchall()]
        except psycopg2.IntegrityError as e:
            raise ConstraintError(str(e).strip()) from e
        except psycopg2.Error as e:
            raise StoreError(str(e).strip()) from e
        finally:
            pool.putconn(conn, close=bool(conn.closed))

    def add_column_if_missing(self, table: str, column: str, ddl_type: str) -> None:
        self.query(f"ALTER TABLE {table} ADD COLUMN IF NOT EXISTS {column} {ddl_type}")

    def describe(self) -> str:
        if "dsn" in self.kwargs:
            return "postgres:<dsn>"
        return f"postgres://{self.kwargs.get('host')}:{self.kwargs.get('port')}/{self.kwargs.get('dbname', '')}"

    def close(self) -> None:
        if self.pool is not None:
            self.pool.closeall()


class UnavailableDatabase(Database):
    """Stand-in when DATABASE_URL cannot be used: every statement fails with the reason."""
    dialect = "unavailable"

    def __init__(self, reason: str):
        self.reason = reason

    def query(self, sql: str, params=()) -> list:
        raise StoreError(self.reason)

    def add_column_if_missing(self, table: str, column: str, ddl_type: str) -> None:
        raise StoreError(self.reason)


def sqlite_path(url: str) -> str:
    """sqlite:///relative.db, sqlite:////abs/path.db or sqlite:///:memory:"""
    return url[len(SQLITE_PREFIX):] or ":memory:"


def create_database(url: str, pool_min: int = 0, pool_max: int = 10,
                    prefer_ipv4: bool = True, sslmode: str = "require") -> Database:
    """Build the backend matching the DATABASE_URL scheme."""
    if url.startswith(POSTGRES_SCHEMES):
        return PostgresDatabase(url, minconn=pool_min, maxconn=pool_max,
                                prefer_ipv4=prefer_ipv4, sslmode=sslmode)
    if url.startswith(SQLITE_PREFIX):
        return SQLiteDatabase(sqlite_path(url))
    raise ValueError(f"Unsupported DATABASE_URL scheme: {url.split(':', 1)[0]}")


def get_db() -> Database:
    """The Database injected into the running app by create_app()."""
    return current_app.extensions[EXTENSION_KEY]
