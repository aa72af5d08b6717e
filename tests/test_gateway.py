"""Unit tests for the chat gateway."""
import pytest
from conftest import FIXED_NOW, ScriptedChatModel
from langchain_core.messages import AIMessage, AIMessageChunk, HumanMessage, SystemMessage

from stockai.gateway.chat import (
    ChatGateway,
    ChatSetupError,
    ChatValidationError,
    chunk_text,
    find_mentioned_symbols,
    format_quote_line,
)
from stockai.models.api import ChatTurn, StreamEvent
from stockai.tools.stock import get_stock_quote
from stockai.utils.format import format_number


async def collect(gateway: ChatGateway, message: str, history: list[ChatTurn] | None = None) -> list[StreamEvent]:
    events = await gateway.open_stream(message, history or [])
    return [event async for event in events]


@pytest.fixture
def gateway(fixed_clock):
    return ChatGateway(ScriptedChatModel([]), clock=fixed_clock)


class TestEnrichment:
    @pytest.mark.parametrize("message", ["Analyze AAPL", "what do you think of aapl?", "AaPl outlook"])
    def test_mentioned_symbol_adds_quote_line(self, gateway: ChatGateway, message: str):
        quote = get_stock_quote("AAPL", FIXED_NOW)
        assert quote is not None

        context = gateway.build_context(message)

        assert "Current market data:" in context
        assert format_quote_line(quote) in context

    def test_no_symbol_gives_only_index_summary(self, gateway: ChatGateway):
        context = gateway.build_context("hello")

        assert "Current market data:" not in context
        assert "Current market indices: S&P 500: " in context
        assert "NASDAQ: " in context
        assert "DOW: " in context

    def test_every_mentioned_symbol_in_table_order(self, gateway: ChatGateway):
        context = gateway.build_context("Compare MSFT with AMD")
        block = context.split("Current market data:\n")[1].split("\n\n")[0]

        assert [line.split(":")[0] for line in block.splitlines()] == ["MSFT", "AMD"]

    def test_single_letter_symbol_matches_anywhere(self):
        # known false positive: any "v" in the text pulls in Visa
        assert "V" in find_mentioned_symbols("Give me an overview")

    def test_quote_line_format(self):
        quote = get_stock_quote("AAPL", FIXED_NOW)
        assert quote is not None

        line = format_quote_line(quote)

        assert line.startswith(f"AAPL: ${format_number(quote.price)} (")
        assert f"Volume: {quote.volume / 1_000_000:.1f}M" in line
        assert f"Market Cap: ${quote.market_cap / 1_000_000_000:.1f}B" in line
        assert "P/E: " in line

    def test_prompt_asks_for_recommendation_confidence_risk_and_disclaimer(self, gateway: ChatGateway):
        context = gateway.build_context("hello")

        assert "BUY, HOLD, or SELL" in context
        assert "confidence percentage" in context
        assert "Risk level (Low, Medium, High)" in context
        assert "not financial advice" in context


class TestMessages:
    def test_system_then_history_then_message(self, gateway: ChatGateway):
        history = [ChatTurn(role="user", content="Hi"), ChatTurn(role="assistant", content="Hello!")]

        messages = gateway.build_messages("Analyze AAPL", history)

        assert [type(m) for m in messages] == [SystemMessage, HumanMessage, AIMessage, HumanMessage]
        assert [m.content for m in messages[1:]] == ["Hi", "Hello!", "Analyze AAPL"]
        assert "AAPL: $" in messages[0].content


class TestChunkText:
    def test_plain_string(self):
        assert chunk_text(AIMessageChunk(content="Apple")) == "Apple"

    def test_content_blocks(self):
        chunk = AIMessageChunk(content=[{"type": "text", "text": "Apple"}, " is"])

        assert chunk_text(chunk) == "Apple is"


class TestOpenStream:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("message", ["", "   ", "\n\t"])
    async def test_empty_message_rejected_before_upstream(self, fixed_clock, message: str):
        model = ScriptedChatModel(["Apple"])
        gateway = ChatGateway(model, clock=fixed_clock)

        with pytest.raises(ChatValidationError, match="Message required"):
            await gateway.open_stream(message, [])

        assert model.calls == []

    @pytest.mark.asyncio
    async def test_fragments_relayed_in_order_then_done(self, fixed_clock):
        model = ScriptedChatModel(["Apple", " is", " strong."])
        gateway = ChatGateway(model, clock=fixed_clock)

        events = await collect(gateway, "Analyze AAPL")

        assert events == [
            StreamEvent(content="Apple"),
            StreamEvent(content=" is"),
            StreamEvent(content=" strong."),
            StreamEvent(done=True),
        ]
        assert model.closed

    @pytest.mark.asyncio
    async def test_empty_fragments_skipped(self, fixed_clock):
        gateway = ChatGateway(ScriptedChatModel(["", "Apple", "", " is"]), clock=fixed_clock)

        events = await collect(gateway, "Analyze AAPL")

        assert events == [StreamEvent(content="Apple"), StreamEvent(content=" is"), StreamEvent(done=True)]

    @pytest.mark.asyncio
    async def test_empty_upstream_only_done(self, fixed_clock):
        gateway = ChatGateway(ScriptedChatModel([]), clock=fixed_clock)

        assert await collect(gateway, "hello") == [StreamEvent(done=True)]

    @pytest.mark.asyncio
    async def test_failure_before_first_fragment_is_setup_error(self, fixed_clock):
        model = ScriptedChatModel(["Apple"], fail_after=0)
        gateway = ChatGateway(model, clock=fixed_clock)

        with pytest.raises(ChatSetupError, match="Failed to process chat"):
            await gateway.open_stream("Analyze AAPL", [])

        assert model.closed

    @pytest.mark.asyncio
    async def test_failure_after_empty_fragments_is_still_setup_error(self, fixed_clock):
        gateway = ChatGateway(ScriptedChatModel(["", ""], fail_after=2), clock=fixed_clock)

        with pytest.raises(ChatSetupError):
            await gateway.open_stream("Analyze AAPL", [])

    @pytest.mark.asyncio
    async def test_mid_stream_failure_yields_single_error(self, fixed_clock):
        model = ScriptedChatModel(["Apple", " is", " strong."], fail_after=1)
        gateway = ChatGateway(model, clock=fixed_clock)

        events = await collect(gateway, "Analyze AAPL")

        assert events == [StreamEvent(content="Apple"), StreamEvent(error="AI service error")]
        assert model.closed

    @pytest.mark.asyncio
    async def test_upstream_receives_history(self, fixed_clock):
        model = ScriptedChatModel(["ok"])
        gateway = ChatGateway(model, clock=fixed_clock)

        await collect(gateway, "And MSFT?", [ChatTurn(role="user", content="Analyze AAPL")])

        sent = model.calls[0]
        assert [m.content for m in sent[1:]] == ["Analyze AAPL", "And MSFT?"]
        assert "MSFT: $" in sent[0].content
