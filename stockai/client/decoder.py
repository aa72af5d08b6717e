import codecs
import logging

from pydantic import ValidationError

from stockai.constants.api import SSE_DATA_PREFIX
from stockai.models.api import StreamEvent

logger = logging.getLogger(__name__)


class EventStreamDecoder:
    """
    Turns raw event-stream bytes into StreamEvents as they arrive.

    Bytes are decoded incrementally, so a multi-byte character split across two reads
    comes out whole. Text is split on newlines and the trailing fragment is held until
    the next feed. Only `data: ` lines are parsed; payloads that do not parse are dropped.
    """

    def __init__(self):
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""

    @property
    def pending(self) -> str:
        return self._buffer

    def feed(self, data: bytes) -> list[StreamEvent]:
        self._buffer += self._decoder.decode(data)
        *lines, self._buffer = self._buffer.split("\n")

        events = []
        for line in lines:
            event = parse_line(line)
            if event is not None:
                events.append(event)
        return events


def parse_line(line: str) -> StreamEvent | None:
    if not line.startswith(SSE_DATA_PREFIX):
        return None

    try:
        return StreamEvent.model_validate_json(line[len(SSE_DATA_PREFIX) :])
    except ValidationError:
        logger.debug(f"Skipping malformed frame: {line!r}")
        return None
