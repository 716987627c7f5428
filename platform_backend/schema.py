"""
Table definitions and startup bootstrap.
"""
import logging

from .errors import StoreError

ARTICLE_STATUSES = ("pending", "published", "rejected")
AD_STATUSES = ("pending", "active", "rejected")

_DIALECT_TOKENS = {
    "sqlite": {"pk": "INTEGER PRIMARY KEY AUTOINCREMENT", "false": "0"},
    "postgres": {"pk": "SERIAL PRIMARY KEY", "false": "FALSE"},
}

_TABLES = [
    """
    CREATE TABLE IF NOT EXISTS articles (
        id {pk},
        title TEXT NOT NULL,
        category TEXT NOT NULL,
        author TEXT DEFAULT 'Citizen Reporter',
        date TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        image TEXT,
        excerpt TEXT,
        content TEXT,
        views INTEGER DEFAULT 0,
        status TEXT CHECK (status IN ('pending', 'published', 'rejected')) DEFAULT 'pending',
        is_breaking BOOLEAN DEFAULT {false},
        sub_headline TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS ads (
        id {pk},
        client_name TEXT NOT NULL,
        email TEXT NOT NULL,
        plan TEXT NOT NULL,
        amount NUMERIC,
        status TEXT CHECK (status IN ('pending', 'active', 'rejected')) DEFAULT 'pending',
        date_submitted TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        receipt_image TEXT,
        ad_image TEXT,
        ad_content TEXT,
        ad_url TEXT,
        ad_headline TEXT,
        ad_content_file TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS comments (
        id {pk},
        article_id INTEGER REFERENCES articles(id) ON DELETE CASCADE,
        author TEXT NOT NULL,
        email TEXT NOT NULL,
        content TEXT NOT NULL,
        date TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS support_messages (
        id {pk},
        name TEXT NOT NULL,
        email TEXT NOT NULL,
        subject TEXT,
        message TEXT NOT NULL,
        date TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        status TEXT DEFAULT 'unread'
    )
    """,
]

# Columns added after the first release; older databases gain them at startup
MIGRATIONS = [
    ("articles", "sub_headline", "TEXT"),
    ("ads", "ad_content_file", "TEXT"),
]


def table_statements(dialect: str) -> list:
    tokens = _DIALECT_TOKENS[dialect]
    return [ddl.format(**tokens).strip() for ddl in _TABLES]


def init_db(db) -> None:
    """Create the tables if missing and apply additive migrations."""
    for statement in table_statements(db.dialect):
        db.query(statement)
    for table, column, ddl_type in MIGRATIONS:
        db.add_column_if_missing(table, column, ddl_type)
    logging.info(f"✅ Tables initialized ({db.dialect})")


def check_connection(db):
    """Run a trivial query and return the database server time."""
    row = db.query_one("SELECT CURRENT_TIMESTAMP AS now")
    return row["now"] if row else None


def bootstrap_database(db) -> bool:
    """
    Test connectivity and create the schema.
    Failures are logged, never raised: the service keeps running and serves
    500s until the database becomes reachable.
    """
    try:
        now = check_connection(db)
        logging.info(f"🗄️ Database connection test successful. Server time: {now}")
    except StoreError as e:
        logging.error(f"❌ Database connection test failed: {e.message}")
        return False

    try:
        init_db(db)
    except StoreError as e:
        logging.error(f"❌ Error creating tables: {e.message}")
        return False
    return True
