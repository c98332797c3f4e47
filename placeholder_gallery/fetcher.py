import logging
from typing import Optional

import requests

from .config import Settings
from .errors import FetchError
from .schemas import FetchedImage

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "image/png"


class PlaceholderFetcher:
    """
    Fetches one PNG of a given size from a placehold.co-style service.

    URL pattern: {base_url}/{width}x{height}.png
    """

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None) -> None:
        self.base_url = settings.base_url.rstrip("/")
        self.timeout = settings.timeout_seconds
        self.verify = settings.verify_tls
        if not self.verify:
            logger.warning("TLS certificate verification is disabled for %s", self.base_url)

        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": settings.user_agent})

    def close(self) -> None:
        self.session.close()

    def url_for(self, width: int, height: int) -> str:
        return f"{self.base_url}/{int(width)}x{int(height)}.png"

    def fetch(self, width: int, height: int) -> FetchedImage:
        url = self.url_for(width, height)

        try:
            resp = self.session.get(url, timeout=self.timeout, verify=self.verify)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(f"{url}: {e}") from e

        # raise_for_status lets a final 3xx through
        if not 200 <= resp.status_code < 300:
            raise FetchError(f"{url}: unexpected status {resp.status_code}")

        if not resp.content:
            raise FetchError(f"{url}: empty response body")

        content_type = resp.headers.get("Content-Type", DEFAULT_CONTENT_TYPE).split(";")[0].strip()
        return FetchedImage(data=resp.content, content_type=content_type or DEFAULT_CONTENT_TYPE)
