import sqlite3
from pathlib import Path


def get_conn(db_path: Path) -> sqlite3.Connection:
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: Path) -> None:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    with get_conn(db_path) as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS assets (
                id TEXT PRIMARY KEY,
                title TEXT,
                filename TEXT UNIQUE,
                file_path TEXT,
                public_url TEXT,
                mime_type TEXT,
                size_bytes INTEGER,
                status TEXT,
                created_at TEXT,

                width INTEGER,
                height INTEGER,
                format TEXT,

                thumb_small_path TEXT,
                thumb_medium_path TEXT
            )
            """
        )
        conn.execute("CREATE INDEX IF NOT EXISTS idx_assets_created_at ON assets(created_at)")

    ensure_column(db_path, "assets", "metadata_generated_at", "TEXT")


def ensure_column(db_path: Path, table: str, column: str, coltype: str) -> None:
    with get_conn(db_path) as conn:
        cols = [r["name"] for r in conn.execute(f"PRAGMA table_info({table})").fetchall()]
        if column not in cols:
            conn.execute(f"ALTER TABLE {table} ADD COLUMN {column} {coltype}")
            conn.commit()
