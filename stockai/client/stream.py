import logging
import os
from collections.abc import Callable, Sequence

import httpx
import requests
from pydantic import ValidationError

from stockai.client.decoder import EventStreamDecoder
from stockai.constants.api import CONNECT_FAILED, INVALID_REQUEST, NETWORK_ERROR
from stockai.models.api import ChatRequest, ChatTurn, StreamEvent

API_URL = os.getenv("API_URL", "http://localhost:8000")
CHAT_PATH = "/api/chat"
HEADERS = {"Content-Type": "application/json", "Accept": "text/event-stream"}

logger = logging.getLogger(__name__)


class ChatCallbacks:
    """
    Caller callbacks for one chat stream. Fires at most one terminal callback.
    """

    def __init__(
        self,
        on_chunk: Callable[[str], None],
        on_done: Callable[[], None],
        on_error: Callable[[str], None],
    ):
        self.on_chunk = on_chunk
        self.on_done = on_done
        self.on_error = on_error
        self.finished = False

    def chunk(self, text: str):
        if not self.finished:
            self.on_chunk(text)

    def done(self):
        if not self.finished:
            self.finished = True
            self.on_done()

    def error(self, message: str):
        if not self.finished:
            self.finished = True
            self.on_error(message)

    def dispatch(self, event: StreamEvent) -> bool:
        """
        Routes one event to its callback. Returns True once the stream is finished.
        """
        if event.done:
            self.done()
        elif event.error:
            self.error(event.error)
        elif event.content:
            self.chunk(event.content)
        return self.finished


def _payload(message: str, history: Sequence[ChatTurn | dict]) -> dict:
    return ChatRequest.model_validate({"message": message, "history": list(history)}).model_dump()


def _url(base_url: str | None) -> str:
    return f"{(base_url or API_URL).rstrip('/')}{CHAT_PATH}"


def stream_chat(
    message: str,
    history: Sequence[ChatTurn | dict],
    on_chunk: Callable[[str], None],
    on_done: Callable[[], None],
    on_error: Callable[[str], None],
    *,
    base_url: str | None = None,
    session: requests.Session | None = None,
) -> None:
    """
    Sends a chat turn and feeds the streamed reply into the callbacks.

    Exactly one of on_done / on_error fires per call. on_chunk fires zero or more
    times before it, in arrival order. A stream that closes without a terminal frame
    counts as done.

    Args:
        message (str): The new user message.
        history (Sequence[ChatTurn | dict]): Prior turns, oldest first.
        on_chunk (Callable[[str], None]): Called with each text fragment.
        on_done (Callable[[], None]): Called when the reply is complete.
        on_error (Callable[[str], None]): Called with a human readable error message.
        base_url (str | None): API root, defaults to API_URL.
        session (requests.Session | None): Session to send the request with.
    """

    callbacks = ChatCallbacks(on_chunk, on_done, on_error)
    http = session or requests.Session()

    try:
        payload = _payload(message, history)
        with http.post(_url(base_url), json=payload, headers=HEADERS, stream=True) as response:
            if not response.ok:
                logger.error(f"Chat request failed with status {response.status_code}")
                callbacks.error(CONNECT_FAILED)
                return

            decoder = EventStreamDecoder()
            for data in response.iter_content(chunk_size=None):
                for event in decoder.feed(data):
                    if callbacks.dispatch(event):
                        return
    except ValidationError as e:
        logger.error(f"Invalid chat request: {e}")
        callbacks.error(INVALID_REQUEST)
        return
    except requests.RequestException as e:
        logger.error(f"Network error: {e}")
        callbacks.error(str(e) or NETWORK_ERROR)
        return
    finally:
        if session is None:
            http.close()

    callbacks.done()


async def astream_chat(
    message: str,
    history: Sequence[ChatTurn | dict],
    on_chunk: Callable[[str], None],
    on_done: Callable[[], None],
    on_error: Callable[[str], None],
    *,
    base_url: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> None:
    """
    Async variant of stream_chat. Suspends only while waiting for bytes.
    """

    callbacks = ChatCallbacks(on_chunk, on_done, on_error)
    http = client or httpx.AsyncClient(timeout=None)

    try:
        payload = _payload(message, history)
        async with http.stream("POST", _url(base_url), json=payload, headers=HEADERS) as response:
            if not response.is_success:
                logger.error(f"Chat request failed with status {response.status_code}")
                callbacks.error(CONNECT_FAILED)
                return

            decoder = EventStreamDecoder()
            async for data in response.aiter_bytes():
                for event in decoder.feed(data):
                    if callbacks.dispatch(event):
                        return
    except ValidationError as e:
        logger.error(f"Invalid chat request: {e}")
        callbacks.error(INVALID_REQUEST)
        return
    except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as e:
        logger.error(f"Network error: {e}")
        callbacks.error(str(e) or NETWORK_ERROR)
        return
    finally:
        if client is None:
            await http.aclose()

    callbacks.done()
