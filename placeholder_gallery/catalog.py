import datetime as dt
import logging
import sqlite3
import uuid
from pathlib import Path
from typing import Dict, List, Optional

from .db import init_db, get_conn
from .errors import CatalogRegistrationError
from .processing import DEFAULT_THUMB_SIZES, extract_metadata, make_thumbnails
from .schemas import StoredFile

logger = logging.getLogger(__name__)

# Attached standalone to the library, never listed as a post.
ASSET_STATUS = "inherit"


def _now_iso() -> str:
    return dt.datetime.utcnow().replace(microsecond=0).isoformat() + "Z"


class SqliteCatalog:
    def __init__(self, db_path: Path, thumbs_dir: Path, thumb_sizes: Optional[Dict[str, int]] = None) -> None:
        self.db_path = Path(db_path)
        self.thumbs_dir = Path(thumbs_dir)
        self.thumb_sizes = thumb_sizes or DEFAULT_THUMB_SIZES

    def init(self) -> None:
        init_db(self.db_path)

    def register(self, stored: StoredFile, title: str, content_type: str) -> str:
        asset_id = str(uuid.uuid4())

        try:
            size_bytes = Path(stored.file_path).stat().st_size
            with get_conn(self.db_path) as conn:
                conn.execute(
                    """
                    INSERT INTO assets (
                        id, title, filename, file_path, public_url,
                        mime_type, size_bytes, status, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        asset_id,
                        title,
                        stored.filename,
                        stored.file_path,
                        stored.public_url,
                        content_type,
                        size_bytes,
                        ASSET_STATUS,
                        _now_iso(),
                    ),
                )
                conn.commit()
        except (sqlite3.Error, OSError) as e:
            raise CatalogRegistrationError(f"Could not register {stored.filename}: {e}") from e

        return asset_id

    def generate_derivatives(self, asset_id: str) -> None:
        """
        Read dimensions/format from the stored original and build thumbnails.
        Raises if the asset is unknown or the file is not a readable image.
        """
        row = self.get(asset_id)
        if row is None:
            raise LookupError(f"Unknown asset {asset_id}")

        image_path = Path(row["file_path"])
        metadata = extract_metadata(image_path)
        thumbs = make_thumbnails(image_path, asset_id, self.thumbs_dir, self.thumb_sizes)

        with get_conn(self.db_path) as conn:
            conn.execute(
                """
                UPDATE assets
                SET width=?, height=?, format=?,
                    thumb_small_path=?, thumb_medium_path=?,
                    metadata_generated_at=?
                WHERE id=?
                """,
                (
                    metadata["width"],
                    metadata["height"],
                    metadata["format"],
                    thumbs.get("small"),
                    thumbs.get("medium"),
                    _now_iso(),
                    asset_id,
                ),
            )
            conn.commit()
        logger.info("Generated derivatives for asset %s", asset_id)

    def get(self, asset_id: str) -> Optional[sqlite3.Row]:
        with get_conn(self.db_path) as conn:
            return conn.execute("SELECT * FROM assets WHERE id=?", (asset_id,)).fetchone()

    def list_assets(self) -> List[sqlite3.Row]:
        with get_conn(self.db_path) as conn:
            return conn.execute("SELECT * FROM assets ORDER BY created_at DESC").fetchall()

    def stats(self) -> dict:
        with get_conn(self.db_path) as conn:
            row = conn.execute(
                """
                SELECT COUNT(*) AS total,
                       COALESCE(SUM(size_bytes), 0) AS total_size_bytes,
                       COUNT(thumb_small_path) AS with_thumbnails
                FROM assets
                """
            ).fetchone()
        return {
            "total": int(row["total"]),
            "total_size_bytes": int(row["total_size_bytes"]),
            "with_thumbnails": int(row["with_thumbnails"]),
        }
