import datetime as dt
import logging
from pathlib import Path
from typing import Callable, Optional

from .errors import StorageWriteError
from .schemas import StoredFile

logger = logging.getLogger(__name__)


class LocalAssetStore:
    """
    Writes originals under uploads_dir/YYYY/MM/ and serves them from
    {public_base_url}/media/YYYY/MM/<filename>.
    """

    def __init__(
        self,
        uploads_dir: Path,
        public_base_url: str,
        clock: Optional[Callable[[], dt.datetime]] = None,
    ) -> None:
        self.uploads_dir = Path(uploads_dir)
        self.public_base_url = public_base_url.rstrip("/")
        self._clock = clock or dt.datetime.utcnow

    def _subdir(self) -> str:
        now = self._clock()
        return f"{now:%Y}/{now:%m}"

    def store(self, data: bytes, filename: str) -> StoredFile:
        if not filename or Path(filename).name != filename:
            raise StorageWriteError(f"Invalid filename: {filename!r}")

        subdir = self._subdir()
        target_dir = self.uploads_dir / subdir
        file_path = target_dir / filename

        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            # "xb" so an existing upload is never overwritten
            f = open(file_path, "xb")
        except OSError as e:
            raise StorageWriteError(f"Could not write {file_path}: {e}") from e

        try:
            with f:
                f.write(data)
        except OSError as e:
            # we created it, so a partial file is ours to remove
            file_path.unlink(missing_ok=True)
            raise StorageWriteError(f"Could not write {file_path}: {e}") from e

        return StoredFile(
            filename=filename,
            file_path=str(file_path),
            public_url=f"{self.public_base_url}/media/{subdir}/{filename}",
        )

    def delete(self, file_path: str) -> None:
        try:
            Path(file_path).unlink(missing_ok=True)
        except OSError:
            logger.warning("Could not delete %s", file_path, exc_info=True)

    def resolve(self, relative_path: str) -> Optional[Path]:
        """Map a /media/ path back to a file inside uploads_dir, or None."""
        root = self.uploads_dir.resolve()
        candidate = (root / relative_path).resolve()
        if root not in candidate.parents or not candidate.is_file():
            return None
        return candidate
