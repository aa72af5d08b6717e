import logging
from typing import Any

import requests

from stockai.client.stream import API_URL
from stockai.models.stock import MarketIndex, StockQuote

logger = logging.getLogger(__name__)


class StockAPIError(Exception):
    def __init__(self, status_code: int):
        super().__init__(f"API error: {status_code}")
        self.status_code = status_code


class StockAPI:
    """Thin client for the /api/stocks routes."""

    def __init__(self, base_url: str | None = None, session: requests.Session | None = None):
        self.base_url = (base_url or API_URL).rstrip("/")
        self.session = session or requests.Session()

    def _get(self, path: str, params: dict[str, str] | None = None) -> Any:
        logger.debug(f"GET {path} {params or ''}")
        response = self.session.get(f"{self.base_url}{path}", params=params)
        if not response.ok:
            raise StockAPIError(response.status_code)
        return response.json()

    def get_quote(self, symbol: str) -> StockQuote:
        return StockQuote.model_validate(self._get(f"/api/stocks/quote/{symbol}"))

    def search(self, query: str) -> list[StockQuote]:
        return [StockQuote.model_validate(item) for item in self._get("/api/stocks/search", {"q": query})]

    def trending(self) -> list[StockQuote]:
        return [StockQuote.model_validate(item) for item in self._get("/api/stocks/trending")]

    def movers(self) -> list[StockQuote]:
        return [StockQuote.model_validate(item) for item in self._get("/api/stocks/movers")]

    def indices(self) -> list[MarketIndex]:
        return [MarketIndex.model_validate(item) for item in self._get("/api/stocks/indices")]
