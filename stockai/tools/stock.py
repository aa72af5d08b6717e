import logging
import math
from datetime import UTC, datetime

from stockai.constants.stocks import (
    MARKET_INDICES,
    PRICE_SWING,
    SEARCH_LIMIT,
    STOCKS,
    TOP_MOVERS_LIMIT,
    TRENDING_SYMBOLS,
)
from stockai.models.stock import MarketIndex, StockQuote
from stockai.utils.format import round2

logger = logging.getLogger(__name__)

MS_PER_MINUTE = 60_000
MS_PER_HOUR = 3_600_000


def variation(seed: float) -> float:
    """
    Pseudo-random value in [0, 1) derived from the seed.
    """
    x = math.sin(seed) * 10000
    return x - math.floor(x)


def _epoch_ms(now: datetime | None) -> float:
    return (now or datetime.now(UTC)).timestamp() * 1000


def _minute_bucket(now: datetime | None) -> int:
    return math.floor(_epoch_ms(now) / MS_PER_MINUTE)


def _hour_bucket(now: datetime | None) -> int:
    return math.floor(_epoch_ms(now) / MS_PER_HOUR)


def _stock_price(symbol: str, now: datetime | None = None) -> float:
    stock = STOCKS.get(symbol)
    if stock is None:
        return 0
    jitter = variation(_minute_bucket(now) + ord(symbol[0]))
    return round2(stock.base_price * (1 + (jitter - 0.5) * PRICE_SWING))


def get_stock_quote(symbol: str, now: datetime | None = None) -> StockQuote | None:
    """
    Computes the current simulated quote for a symbol.

    Args:
        symbol (str): Ticker symbol, case-insensitive.
        now (datetime | None): Instant to quote at. Defaults to the current time.

    Returns:
        StockQuote | None: The quote, or None if the symbol is unknown.
    """

    sym = symbol.upper()
    stock = STOCKS.get(sym)
    if stock is None:
        logger.debug(f"Unknown symbol requested: {symbol}")
        return None

    now = now or datetime.now(UTC)
    price = _stock_price(sym, now)
    prev_close = stock.base_price
    change = round2(price - prev_close)
    change_percent = round2(change / prev_close * 100)

    day_var = variation(_hour_bucket(now) + ord(sym[0]))
    volume = round((5 + day_var * 45) * 1_000_000)
    market_cap = round(price * (volume * 100 + 1_000_000_000))
    pe_base = 15 + day_var * 30

    return StockQuote(
        symbol=sym,
        name=stock.name,
        sector=stock.sector,
        price=price,
        change=change,
        change_percent=change_percent,
        previous_close=prev_close,
        open=round2(prev_close + (price - prev_close) * 0.3),
        day_high=round2(max(price, prev_close) * 1.012),
        day_low=round2(min(price, prev_close) * 0.988),
        volume=volume,
        market_cap=market_cap,
        pe=round2(pe_base),
        eps=round2(price / pe_base),
        dividend_yield=round2(day_var * 3),
        week52_high=round2(price * 1.25),
        week52_low=round2(price * 0.72),
    )


def _require_quote(symbol: str, now: datetime | None) -> StockQuote:
    quote = get_stock_quote(symbol, now)
    if quote is None:
        raise KeyError(symbol)
    return quote


def search_stocks(query: str, now: datetime | None = None) -> list[StockQuote]:
    q = query.lower()
    matches = [
        symbol for symbol, stock in STOCKS.items() if q in symbol.lower() or q in stock.name.lower()
    ]
    return [_require_quote(symbol, now) for symbol in matches[:SEARCH_LIMIT]]


def get_trending_stocks(now: datetime | None = None) -> list[StockQuote]:
    return [_require_quote(symbol, now) for symbol in TRENDING_SYMBOLS]


def get_top_movers(now: datetime | None = None) -> list[StockQuote]:
    quotes = [_require_quote(symbol, now) for symbol in STOCKS]
    quotes.sort(key=lambda q: abs(q.change_percent), reverse=True)
    return quotes[:TOP_MOVERS_LIMIT]


def get_market_indices(now: datetime | None = None) -> list[MarketIndex]:
    minute = _minute_bucket(now)
    indices = []
    for listing in MARKET_INDICES:
        value_jitter = variation(minute + listing.value_seed) - 0.5
        change_jitter = variation(minute + listing.change_seed) - 0.5
        indices.append(
            MarketIndex(
                name=listing.name,
                value=round2(listing.base_value + value_jitter * listing.value_spread),
                change=round2(change_jitter * listing.change_spread),
                change_percent=round2(change_jitter * listing.percent_spread),
            )
        )
    return indices


def get_all_symbols() -> list[str]:
    return list(STOCKS)


if __name__ == "__main__":
    ticker = input("Ticker> ")
    print(get_stock_quote(ticker))
