from .api import StockAPI, StockAPIError
from .decoder import EventStreamDecoder
from .stream import astream_chat, stream_chat

__all__ = ["EventStreamDecoder", "StockAPI", "StockAPIError", "astream_chat", "stream_chat"]
