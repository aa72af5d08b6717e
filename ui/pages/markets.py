import logging

import requests
import streamlit as st
from streamlit.delta_generator import DeltaGenerator

from stockai.client import StockAPI, StockAPIError
from stockai.models.stock import StockQuote
from stockai.utils.format import format_large_money, format_money, format_number, format_volume

logger = logging.getLogger(__name__)

api = StockAPI()

st.title("StockAI")
st.subheader("Markets")


def draw_quote_row(quote: StockQuote, container: DeltaGenerator):
    with container:
        col1, col2, col3 = st.columns(3)
        col1.metric(
            f"**{quote.symbol}** _{quote.name}_",
            format_money(quote.price),
            f"{format_number(quote.change_percent)}%",
        )
        col2.metric("Volume", format_volume(quote.volume), delta_color="off")
        col3.metric("Market Cap", format_large_money(quote.market_cap), delta_color="off")


def draw_quote_details(quote: StockQuote):
    """
    Draws the full quote, like the stock detail screen
    """

    st.markdown(f"### {quote.symbol} · {quote.name}")
    st.caption(quote.sector)
    _delta = f"{format_number(quote.change)} ({format_number(quote.change_percent)}%)"
    st.metric("Price", format_money(quote.price), _delta)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Open", format_money(quote.open))
    col1.metric("Prev Close", format_money(quote.previous_close))
    col2.metric("Day High", format_money(quote.day_high))
    col2.metric("Day Low", format_money(quote.day_low))
    col3.metric("52W High", format_money(quote.week52_high))
    col3.metric("52W Low", format_money(quote.week52_low))
    col4.metric("P/E", format_number(quote.pe))
    col4.metric("EPS", format_money(quote.eps))

    st.caption(
        f"Volume {format_volume(quote.volume)} · Market Cap {format_large_money(quote.market_cap)} · "
        f"Dividend Yield {format_number(quote.dividend_yield)}%"
    )


try:
    columns = st.columns(3)
    for column, index in zip(columns, api.indices()):
        column.metric(index.name, format_number(index.value), f"{format_number(index.change_percent)}%")

    query = st.text_input("Search stocks", placeholder="Symbol or company name")
    if query:
        results = api.search(query)
        if not results:
            st.info(f"No stocks match '{query}'")
        for quote in results:
            with st.expander(f"{quote.symbol} · {quote.name}"):
                draw_quote_details(quote)

    st.markdown("#### Trending")
    for quote in api.trending():
        draw_quote_row(quote, st.container())

    st.markdown("#### Top Movers")
    for quote in api.movers():
        draw_quote_row(quote, st.container())

except StockAPIError as e:
    st.error(f"Error: {e}")
    logger.error(f"Stock API error: {e}")
except requests.RequestException as e:
    st.error(f"Network error: {e}")
    logger.error(f"Network error: {e}")
