import threading
from types import SimpleNamespace

import pytest

from savedlinks_components.ui import TerminalUI


class FakeResponse:
    def __init__(self, status_code=200, headers=None, text="", chunks=(), url=""):
        self.status_code = status_code
        self.headers = headers or {}
        self.text = text
        self.chunks = list(chunks)
        self.url = url
        self.body_read = False
        self.closed = False

    def iter_content(self, chunk_size=1):
        self.body_read = True
        for chunk in self.chunks:
            if isinstance(chunk, Exception):
                raise chunk
            yield chunk

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


class FakeSession:
    """Routes ``get`` calls to canned responses; anything unrouted is a 404."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []
        self.responses = []
        self.lock = threading.Lock()

    def get(self, url, **kwargs):
        with self.lock:
            self.calls.append((url, kwargs))
        route = self.routes.get(url)
        if isinstance(route, Exception):
            raise route
        resp = route() if route is not None else FakeResponse(status_code=404, url=url)
        with self.lock:
            self.responses.append(resp)
        return resp

    def urls(self):
        return [url for url, _ in self.calls]


def media(body=b"data", content_type="image/jpg"):
    return lambda: FakeResponse(headers={"Content-Type": content_type}, chunks=[body])


def page(html, status_code=200):
    return lambda: FakeResponse(status_code=status_code, text=html)


@pytest.fixture
def ui():
    return TerminalUI(pretty=False)


@pytest.fixture
def make_sessions():
    def factory(session):
        return SimpleNamespace(get=lambda: session)

    return factory
