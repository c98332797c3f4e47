import pytest
import requests

from placeholder_gallery.config import Settings
from placeholder_gallery.errors import FetchError
from placeholder_gallery.fetcher import PlaceholderFetcher


class FakeResponse:
    def __init__(self, status_code=200, content=b"png-bytes", headers=None):
        self.status_code = status_code
        self.content = content
        self.headers = headers or {"Content-Type": "image/png"}

    def raise_for_status(self):
        # same threshold as requests.Response.raise_for_status
        if 400 <= self.status_code < 600:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.headers = {}
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.exc:
            raise self.exc
        return self.response


def make_fetcher(session, **overrides):
    settings = Settings(_env_file=None, **overrides)
    return PlaceholderFetcher(settings, session=session)


def test_fetch_builds_url_and_returns_bytes():
    session = FakeSession(FakeResponse(content=b"x" * 1024))
    image = make_fetcher(session).fetch(250, 180)

    assert image.data == b"x" * 1024
    assert image.content_type == "image/png"
    url, kwargs = session.calls[0]
    assert url == "https://placehold.co/250x180.png"
    assert kwargs == {"timeout": 30.0, "verify": True}
    assert session.headers["User-Agent"] == "placeholder-gallery/1.0"


def test_fetch_uses_configured_endpoint_and_tls_opt_out():
    session = FakeSession(FakeResponse())
    make_fetcher(session, base_url="http://images.local/", verify_tls=False).fetch(100, 500)

    url, kwargs = session.calls[0]
    assert url == "http://images.local/100x500.png"
    assert kwargs["verify"] is False


def test_content_type_parameters_are_dropped():
    session = FakeSession(FakeResponse(headers={"Content-Type": "image/png; charset=binary"}))
    assert make_fetcher(session).fetch(100, 100).content_type == "image/png"


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(exc=requests.Timeout("timed out")),
        FakeSession(exc=requests.ConnectionError("refused")),
        FakeSession(FakeResponse(status_code=503)),
        FakeSession(FakeResponse(status_code=300, content=b"<html>choose a variant</html>")),
        FakeSession(FakeResponse(status_code=304)),
        FakeSession(FakeResponse(content=b"")),
    ],
)
def test_fetch_failures_raise_fetch_error(session):
    with pytest.raises(FetchError):
        make_fetcher(session).fetch(100, 100)
    assert len(session.calls) == 1
