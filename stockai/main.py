import logging
import os
import time
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse

from stockai.ai_models.chat import create_chat_model
from stockai.constants.api import CHAT_SETUP_FAILED, STOCK_NOT_FOUND
from stockai.gateway.chat import ChatGateway, ChatSetupError, ChatValidationError
from stockai.models.api import ChatRequest, ErrorResponse
from stockai.models.stock import MarketIndex, StockQuote
from stockai.tools.stock import (
    get_all_symbols,
    get_market_indices,
    get_stock_quote,
    get_top_movers,
    get_trending_stocks,
    search_stocks,
)
from stockai.utils.logger import setup_logging
from stockai.utils.sse import sse_format

DEBUG = os.getenv("DEBUG", "0") == "1"
ALLOWED_ORIGINS = [origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "").split(",") if origin.strip()]
LOG_LINE_LIMIT = 100

setup_logging()
logger = logging.getLogger(__name__)


@lru_cache
def get_gateway() -> ChatGateway:
    try:
        chat_model = create_chat_model()
    except Exception as e:
        logger.error(f"Could not create chat model: {e}")
        raise ChatSetupError(CHAT_SETUP_FAILED) from e
    return ChatGateway(chat_model)


app = FastAPI(title="StockAI API", debug=DEBUG)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_origin_regex=r"^http://(localhost|127\.0\.0\.1):\d+$",
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.middleware("http")
async def log_api_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)

    if request.url.path.startswith("/api"):
        duration = round((time.perf_counter() - start) * 1000)
        line = f"{request.method} {request.url.path} {response.status_code} {duration}ms"
        logger.info(line if len(line) <= LOG_LINE_LIMIT else line[: LOG_LINE_LIMIT - 1] + "…")

    return response


@app.exception_handler(ChatValidationError)
async def chat_validation_error(_: Request, exc: ChatValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content=ErrorResponse(error=str(exc)).model_dump())


@app.exception_handler(ChatSetupError)
async def chat_setup_error(_: Request, exc: ChatSetupError) -> JSONResponse:
    return JSONResponse(status_code=500, content=ErrorResponse(error=str(exc)).model_dump())


@app.get("/")
async def root():
    return {"message": "Welcome to the StockAI API!"}


@app.get("/health")
async def health():
    return {"message": "Health Check!"}


@app.get("/api/stocks/quote/{symbol}", response_model=StockQuote, responses={404: {"model": ErrorResponse}})
async def stock_quote(symbol: str):
    quote = get_stock_quote(symbol)
    if quote is None:
        return JSONResponse(status_code=404, content=ErrorResponse(error=STOCK_NOT_FOUND).model_dump())
    return quote


@app.get("/api/stocks/search", response_model=list[StockQuote])
async def stock_search(q: str = ""):
    return search_stocks(q)


@app.get("/api/stocks/trending", response_model=list[StockQuote])
async def stock_trending():
    return get_trending_stocks()


@app.get("/api/stocks/movers", response_model=list[StockQuote])
async def stock_movers():
    return get_top_movers()


@app.get("/api/stocks/indices", response_model=list[MarketIndex])
async def stock_indices():
    return get_market_indices()


@app.get("/api/stocks/symbols")
async def stock_symbols() -> list[str]:
    return get_all_symbols()


@app.post("/api/chat")
async def chat(request: ChatRequest, gateway: Annotated[ChatGateway, Depends(get_gateway)]) -> StreamingResponse:
    # raises before any frame is written, handled by the exception handlers above
    events = await gateway.open_stream(request.message, request.history)

    async def stream_generator():
        async for event in events:
            yield sse_format(event)

    return StreamingResponse(
        stream_generator(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )
