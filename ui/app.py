import streamlit as st

from stockai.utils.logger import setup_logging

setup_logging()

markets_page = st.Page("pages/markets.py", title="Markets", icon="📈")
chat_page = st.Page("pages/chat.py", title="StockAI Chat", icon="🤖")

pg = st.navigation([markets_page, chat_page])
pg.run()
