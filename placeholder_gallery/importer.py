import logging
import random
from typing import Optional, Set

from .errors import ImportFailure
from .ports import AssetStore, ImageFetcher, MediaCatalog

logger = logging.getLogger(__name__)

CONTENT_TYPE = "image/png"


def placeholder_title(width: int, height: int) -> str:
    return f"Placeholder {width}x{height}"


class PlaceholderImporter:
    """
    Fetch -> store -> register -> derivatives, for one image.

    Every failure cause (fetch, write, register) comes back as None; a file
    that was written but could not be registered is deleted first.
    """

    def __init__(
        self,
        fetcher: ImageFetcher,
        store: AssetStore,
        catalog: MediaCatalog,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.fetcher = fetcher
        self.store = store
        self.catalog = catalog
        self.rng = rng or random.Random()
        self._issued: Set[str] = set()

    def make_filename(self, width: int, height: int) -> str:
        while True:
            suffix = f"{self.rng.getrandbits(52):013x}"
            filename = f"placeholder_{width}x{height}_{suffix}.png"
            if filename not in self._issued:
                self._issued.add(filename)
                return filename

    def import_placeholder(self, width: int, height: int) -> Optional[str]:
        try:
            image = self.fetcher.fetch(width, height)
            stored = self.store.store(image.data, self.make_filename(width, height))
        except ImportFailure as e:
            logger.warning("Placeholder %dx%d not stored: %s", width, height, e)
            return None

        try:
            asset_id = self.catalog.register(stored, placeholder_title(width, height), CONTENT_TYPE)
        except ImportFailure as e:
            logger.warning("Placeholder %dx%d not registered: %s", width, height, e)
            self.store.delete(stored.file_path)
            return None

        try:
            self.catalog.generate_derivatives(asset_id)
        except Exception:
            logger.exception("Derivative generation failed for asset %s", asset_id)

        return asset_id
