import logging
from collections.abc import AsyncIterator, Callable
from datetime import UTC, datetime
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from stockai.constants.api import AI_SERVICE_ERROR, CHAT_SETUP_FAILED, MESSAGE_REQUIRED
from stockai.models.api import ChatTurn, StreamEvent
from stockai.models.stock import MarketIndex, StockQuote
from stockai.prompts.analyst import ANALYST_PROMPT, STOCK_CONTEXT_HEADER
from stockai.tools.stock import get_all_symbols, get_market_indices, get_stock_quote
from stockai.utils.format import format_change_percent, format_number

logger = logging.getLogger(__name__)


class ChatGatewayError(Exception):
    """Chat request rejected before any frame was sent."""


class ChatValidationError(ChatGatewayError):
    pass


class ChatSetupError(ChatGatewayError):
    pass


def format_quote_line(quote: StockQuote) -> str:
    return (
        f"{quote.symbol}: ${format_number(quote.price)} ({format_change_percent(quote.change, quote.change_percent)}), "
        f"Volume: {quote.volume / 1_000_000:.1f}M, P/E: {format_number(quote.pe)}, "
        f"Market Cap: ${quote.market_cap / 1_000_000_000:.1f}B"
    )


def format_index(index: MarketIndex) -> str:
    return f"{index.name}: {format_number(index.value)} ({format_change_percent(index.change, index.change_percent)})"


def find_mentioned_symbols(message: str) -> list[str]:
    # plain substring match, so single letter symbols like "V" hit often
    text = message.upper()
    return [symbol for symbol in get_all_symbols() if symbol in text]


def chunk_text(chunk: BaseMessage) -> str:
    content: Any = chunk.content
    if isinstance(content, str):
        return content

    # some providers stream content blocks instead of plain strings
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


async def _next_text(upstream: AsyncIterator[BaseMessage]) -> str | None:
    """
    Advance to the next non-empty fragment. None when the upstream is exhausted.
    """
    async for chunk in upstream:
        text = chunk_text(chunk)
        if text:
            return text
    return None


async def _close(upstream: AsyncIterator[BaseMessage]) -> None:
    aclose = getattr(upstream, "aclose", None)
    if aclose is not None:
        await aclose()


class ChatGateway:
    """
    Relays a chat turn to the upstream model and re-emits its output as StreamEvents.

    The chat model is injected; anything with LangChain's `astream(messages)` works.
    """

    def __init__(self, chat_model: BaseChatModel, clock: Callable[[], datetime] | None = None):
        self.chat_model = chat_model
        self.clock = clock or (lambda: datetime.now(UTC))

    def build_context(self, message: str) -> str:
        now = self.clock()

        index_context = ", ".join(format_index(index) for index in get_market_indices(now))

        quote_lines = []
        for symbol in find_mentioned_symbols(message):
            quote = get_stock_quote(symbol, now)
            if quote is not None:
                quote_lines.append(format_quote_line(quote))

        stock_context = STOCK_CONTEXT_HEADER + "\n".join(quote_lines) if quote_lines else ""
        return ANALYST_PROMPT.format(index_context=index_context, stock_context=stock_context)

    def build_messages(self, message: str, history: list[ChatTurn]) -> list[BaseMessage]:
        messages: list[BaseMessage] = [SystemMessage(self.build_context(message))]
        for turn in history:
            if turn.role == "assistant":
                messages.append(AIMessage(turn.content))
            else:
                messages.append(HumanMessage(turn.content))
        messages.append(HumanMessage(message))
        return messages

    async def open_stream(self, message: str, history: list[ChatTurn]) -> AsyncIterator[StreamEvent]:
        """
        Validates the request and starts the upstream stream.

        The upstream is read up to its first non-empty fragment before returning, so a
        provider that fails before producing any output raises here instead of in-band.

        Raises:
            ChatValidationError: message is empty or whitespace.
            ChatSetupError: the upstream failed before its first fragment.
        """

        if not message or not message.strip():
            raise ChatValidationError(MESSAGE_REQUIRED)

        messages = self.build_messages(message, history)
        logger.debug(f"Opening upstream stream with {len(messages)} messages")

        upstream = aiter(self.chat_model.astream(messages))
        try:
            first = await _next_text(upstream)
        except Exception as e:
            logger.error(f"Chat setup failed: {e}")
            await _close(upstream)
            raise ChatSetupError(CHAT_SETUP_FAILED) from e

        return self._relay(first, upstream)

    async def _relay(self, first: str | None, upstream: AsyncIterator[BaseMessage]) -> AsyncIterator[StreamEvent]:
        try:
            if first is None:
                yield StreamEvent(done=True)
                return

            yield StreamEvent(content=first)

            try:
                async for chunk in upstream:
                    text = chunk_text(chunk)
                    if text:
                        yield StreamEvent(content=text)
            except Exception as e:
                logger.error(f"Chat stream failed mid-response: {e}")
                yield StreamEvent(error=AI_SERVICE_ERROR)
                return

            yield StreamEvent(done=True)
        finally:
            await _close(upstream)
