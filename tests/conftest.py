import io
import random

import pytest
from PIL import Image

from placeholder_gallery.config import Settings
from placeholder_gallery.errors import CatalogRegistrationError, FetchError, StorageWriteError
from placeholder_gallery.schemas import FetchedImage, StoredFile


def png_bytes(width: int = 300, height: int = 200) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), (200, 200, 200)).save(buf, format="PNG")
    return buf.getvalue()


class FakeFetcher:
    def __init__(self, data: bytes = b"\x89PNG" + b"\x00" * 1020, fail_on=()):
        self.data = data
        self.fail_on = set(fail_on)
        self.calls = []

    def fetch(self, width, height):
        self.calls.append((width, height))
        if len(self.calls) in self.fail_on:
            raise FetchError("boom")
        return FetchedImage(data=self.data, content_type="image/png")


class FailingFetcher:
    def fetch(self, width, height):
        raise FetchError("service down")


class FakeStore:
    def __init__(self, fail=False):
        self.fail = fail
        self.files = {}
        self.filenames = []
        self.deleted = []

    def store(self, data, filename):
        if self.fail:
            raise StorageWriteError("disk full")
        path = f"/uploads/{filename}"
        self.files[path] = data
        self.filenames.append(filename)
        return StoredFile(filename=filename, file_path=path, public_url=f"http://test/media/{filename}")

    def delete(self, file_path):
        self.deleted.append(file_path)
        self.files.pop(file_path, None)


class FakeCatalog:
    def __init__(self, fail_register=False, fail_derivatives=False):
        self.fail_register = fail_register
        self.fail_derivatives = fail_derivatives
        self.registered = []
        self.derived = []

    def register(self, stored, title, content_type):
        if self.fail_register:
            raise CatalogRegistrationError("db locked")
        self.registered.append((stored, title, content_type))
        return f"asset-{len(self.registered)}"

    def generate_derivatives(self, asset_id):
        if self.fail_derivatives:
            raise OSError("cannot identify image file")
        self.derived.append(asset_id)


class ScriptedRandom(random.Random):
    """Random whose randint() replays a fixed sequence before falling back."""

    def __init__(self, ints=(), seed=0):
        super().__init__(seed)
        self._ints = list(ints)

    def randint(self, a, b):
        if self._ints:
            return self._ints.pop(0)
        return super().randint(a, b)


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=tmp_path / "data", public_base_url="http://testserver", _env_file=None)
