import httpx
import pytest

from storefront import devserver
from storefront.api import BackendClient
from storefront.schemas import Product

BASE_URL = "http://testserver"


class RecordingTransport(httpx.AsyncBaseTransport):
    """Serves requests from the dev app and records each one.

    ``fail`` may be set to a callable taking the request and returning an
    exception to raise, a response to return instead, or None to pass through.
    """

    def __init__(self, app):
        self.inner = httpx.ASGITransport(app=app)
        self.requests: list[httpx.Request] = []
        self.fail = None

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail is not None:
            outcome = self.fail(request)
            if isinstance(outcome, Exception):
                raise outcome
            if outcome is not None:
                return outcome
        return await self.inner.handle_async_request(request)

    def count(self, method: str, path: str) -> int:
        return sum(1 for r in self.requests if r.method == method and r.url.path == path)


def fail_path(path: str, outcome):
    """Build a ``fail`` hook hitting only ``path``."""

    def hook(request: httpx.Request):
        if request.url.path != path:
            return None
        if outcome == "connect":
            return httpx.ConnectError("connection refused", request=request)
        return outcome

    return hook


@pytest.fixture(autouse=True)
def fresh_store():
    devserver.reset_store()
    yield
    devserver.reset_store()


@pytest.fixture
def transport():
    return RecordingTransport(devserver.app)


@pytest.fixture
def backend(transport):
    return BackendClient(httpx.AsyncClient(transport=transport, base_url=BASE_URL))


@pytest.fixture
def seed_products():
    return [Product(**p) for p in devserver.SEED_PRODUCTS]
