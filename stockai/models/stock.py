from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class StockQuote(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    symbol: str = Field(description="Stock ticker symbol")
    name: str = Field(description="Display name of the company")
    sector: str = Field(description="Market sector of the company")
    price: float = Field(description="Current simulated price")
    change: float = Field(description="Price minus previous close")
    change_percent: float = Field(description="Change relative to previous close, in percent")
    previous_close: float = Field(description="Previous closing price")
    open: float = Field(description="Opening price of the session")
    day_high: float = Field(description="Highest price during the session")
    day_low: float = Field(description="Lowest price during the session")
    volume: int = Field(description="Number of shares traded")
    market_cap: int = Field(description="Market capitalization in dollars")
    pe: float = Field(description="Price to earnings ratio")
    eps: float = Field(description="Earnings per share")
    dividend_yield: float = Field(description="Annual dividend yield percentage")
    week52_high: float = Field(description="52 week high")
    week52_low: float = Field(description="52 week low")


class MarketIndex(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(description="Index name")
    value: float = Field(description="Current index level")
    change: float = Field(description="Points changed since previous close")
    change_percent: float = Field(description="Change in percent")
