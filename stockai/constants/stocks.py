from typing import Final, NamedTuple


class StockListing(NamedTuple):
    name: str
    sector: str
    base_price: float


class IndexListing(NamedTuple):
    name: str
    base_value: float
    value_spread: float
    change_spread: float
    percent_spread: float
    # seed offsets from the minute bucket
    value_seed: int
    change_seed: int


STOCKS: Final[dict[str, StockListing]] = {
    "AAPL": StockListing("Apple Inc.", "Technology", 198.50),
    "MSFT": StockListing("Microsoft Corp.", "Technology", 428.80),
    "GOOGL": StockListing("Alphabet Inc.", "Technology", 175.20),
    "AMZN": StockListing("Amazon.com Inc.", "Consumer Cyclical", 197.30),
    "NVDA": StockListing("NVIDIA Corp.", "Technology", 135.40),
    "TSLA": StockListing("Tesla Inc.", "Consumer Cyclical", 248.90),
    "META": StockListing("Meta Platforms Inc.", "Technology", 520.10),
    "JPM": StockListing("JPMorgan Chase & Co.", "Financial Services", 205.60),
    "V": StockListing("Visa Inc.", "Financial Services", 285.40),
    "JNJ": StockListing("Johnson & Johnson", "Healthcare", 156.80),
    "WMT": StockListing("Walmart Inc.", "Consumer Defensive", 172.30),
    "PG": StockListing("Procter & Gamble Co.", "Consumer Defensive", 168.90),
    "UNH": StockListing("UnitedHealth Group Inc.", "Healthcare", 532.40),
    "HD": StockListing("Home Depot Inc.", "Consumer Cyclical", 370.20),
    "BAC": StockListing("Bank of America Corp.", "Financial Services", 39.80),
    "DIS": StockListing("Walt Disney Co.", "Communication Services", 112.50),
    "NFLX": StockListing("Netflix Inc.", "Communication Services", 685.30),
    "AMD": StockListing("Advanced Micro Devices", "Technology", 162.70),
    "CRM": StockListing("Salesforce Inc.", "Technology", 268.40),
    "INTC": StockListing("Intel Corp.", "Technology", 31.20),
    "PYPL": StockListing("PayPal Holdings Inc.", "Financial Services", 72.80),
    "UBER": StockListing("Uber Technologies Inc.", "Technology", 78.50),
    "SQ": StockListing("Block Inc.", "Technology", 85.60),
    "SNAP": StockListing("Snap Inc.", "Communication Services", 16.40),
    "COIN": StockListing("Coinbase Global Inc.", "Financial Services", 258.90),
}

MARKET_INDICES: Final[list[IndexListing]] = [
    IndexListing("S&P 500", 5420, 80, 40, 0.8, value_seed=0, change_seed=1),
    IndexListing("NASDAQ", 17180, 200, 120, 0.9, value_seed=2, change_seed=3),
    IndexListing("DOW", 39850, 300, 200, 0.6, value_seed=4, change_seed=5),
]

TRENDING_SYMBOLS: Final[list[str]] = ["AAPL", "NVDA", "TSLA", "MSFT", "AMZN", "META", "GOOGL", "NFLX"]

SEARCH_LIMIT: Final[int] = 10
TOP_MOVERS_LIMIT: Final[int] = 6

# price drifts at most +/-3% around the base price
PRICE_SWING: Final[float] = 0.06
