import logging
import random
from typing import Optional

from .config import Settings
from .errors import InvalidCountError
from .fetcher import PlaceholderFetcher
from .importer import PlaceholderImporter
from .ports import MediaCatalog
from .schemas import BatchResult, ImageRequest
from .storage import LocalAssetStore

logger = logging.getLogger(__name__)


class BatchRunner:
    def __init__(
        self,
        importer: PlaceholderImporter,
        settings: Settings,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.importer = importer
        self.settings = settings
        self.rng = rng or random.Random()

    def normalize_count(self, count: int) -> int:
        low, high = self.settings.min_count, self.settings.max_count
        count = int(count)
        if low <= count <= high:
            return count
        if self.settings.count_policy == "reject":
            raise InvalidCountError(f"count must be between {low} and {high}, got {count}")
        return max(low, min(high, count))

    def random_dimensions(self) -> ImageRequest:
        low, high = self.settings.min_dimension, self.settings.max_dimension
        return ImageRequest(width=self.rng.randint(low, high), height=self.rng.randint(low, high))

    def run_batch(self, count: int) -> BatchResult:
        count = self.normalize_count(count)
        succeeded = 0

        for _ in range(count):
            req = self.random_dimensions()
            if self.importer.import_placeholder(req.width, req.height) is not None:
                succeeded += 1

        logger.info("Batch finished: %d/%d placeholders imported", succeeded, count)
        return BatchResult(requested=count, succeeded=succeeded)


def build_runner(settings: Settings, catalog: MediaCatalog, rng: Optional[random.Random] = None) -> BatchRunner:
    """Wire the default fetcher and local store around a catalog."""
    rng = rng or random.Random()
    store = LocalAssetStore(settings.uploads_dir, settings.public_base_url)
    importer = PlaceholderImporter(PlaceholderFetcher(settings), store, catalog, rng=rng)
    return BatchRunner(importer, settings, rng=rng)
