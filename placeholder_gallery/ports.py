"""
Collaborator contracts for the import pipeline.

The importer and batch runner only see these protocols, so tests can hand in
plain fakes and the service can swap storage or catalog backends.
"""
from typing import Protocol

from .schemas import FetchedImage, StoredFile


class ImageFetcher(Protocol):
    def fetch(self, width: int, height: int) -> FetchedImage: ...


class AssetStore(Protocol):
    def store(self, data: bytes, filename: str) -> StoredFile: ...

    def delete(self, file_path: str) -> None: ...


class MediaCatalog(Protocol):
    def register(self, stored: StoredFile, title: str, content_type: str) -> str: ...

    def generate_derivatives(self, asset_id: str) -> None: ...
