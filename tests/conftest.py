"""Pytest configuration and shared fixtures."""
from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessageChunk

from stockai.gateway.chat import ChatGateway
from stockai.main import app, get_gateway

FIXED_NOW = datetime(2025, 3, 14, 15, 30, 12, tzinfo=UTC)


class ScriptedChatModel:
    """Stand-in for a LangChain chat model that streams fixed fragments.

    fail_after: number of fragments yielded before raising, None never raises.
    """

    def __init__(self, fragments: list[str], fail_after: int | None = None):
        self.fragments = fragments
        self.fail_after = fail_after
        self.calls: list[list] = []
        self.closed = False

    async def astream(self, messages):
        self.calls.append(messages)
        try:
            for index, fragment in enumerate(self.fragments):
                if index == self.fail_after:
                    raise RuntimeError("upstream connection reset")
                yield AIMessageChunk(content=fragment)
            if self.fail_after is not None and self.fail_after >= len(self.fragments):
                raise RuntimeError("upstream connection reset")
        finally:
            self.closed = True


class CallbackRecorder:
    """Records stream callbacks in call order."""

    def __init__(self):
        self.calls: list[tuple] = []

    def on_chunk(self, text: str):
        self.calls.append(("chunk", text))

    def on_done(self):
        self.calls.append(("done",))

    def on_error(self, message: str):
        self.calls.append(("error", message))

    @property
    def callbacks(self):
        return self.on_chunk, self.on_done, self.on_error


class FakeResponse:
    """Streams canned byte chunks like a requests.Response opened with stream=True."""

    def __init__(self, chunks: list[bytes | Exception], status_code: int = 200):
        self.chunks = chunks
        self.status_code = status_code
        self.reads = 0
        self.close_count = 0

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def iter_content(self, chunk_size=None):
        for chunk in self.chunks:
            if isinstance(chunk, Exception):
                raise chunk
            self.reads += 1
            yield chunk

    def close(self):
        self.close_count += 1

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


class FakeSession:
    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.requests: list[tuple[str, dict]] = []

    def post(self, url: str, **kwargs):
        self.requests.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


def split_bytes(data: bytes, size: int) -> list[bytes]:
    return [data[i : i + size] for i in range(0, len(data), size)]


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def recorder():
    return CallbackRecorder()


@pytest.fixture
def install_model(fixed_clock):
    """Route /api/chat through a gateway backed by the given model."""

    def _install(model) -> ChatGateway:
        gateway = ChatGateway(model, clock=fixed_clock)
        app.dependency_overrides[get_gateway] = lambda: gateway
        return gateway

    yield _install
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
