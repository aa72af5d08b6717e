import logging
import os
from typing import cast

import streamlit as st

from stockai.client import stream_chat
from stockai.models.api import ChatTurn
from stockai.utils.format import escape_markdown

INITIAL_MESSAGE = os.getenv(
    "INITIAL_MESSAGE",
    "Hey! I am StockAI. Ask me about any stock, like AAPL or NVDA, and I'll give you a quick analysis.",
)

logger = logging.getLogger(__name__)

st.title("StockAI")
st.subheader("AI Stock Analyst")

if "history" not in st.session_state:
    st.session_state.history = []

st.chat_message("assistant").markdown(INITIAL_MESSAGE)

for turn in cast(list[ChatTurn], st.session_state.history):
    st.chat_message(turn.role).markdown(escape_markdown(turn.content))

if prompt := st.chat_input("Ask about a stock..."):
    # history sent upstream excludes the new message
    history = list(st.session_state.history)
    st.session_state.history.append(ChatTurn(role="user", content=prompt))

    with st.chat_message("user"):
        st.markdown(escape_markdown(prompt))

    with st.chat_message("assistant"):
        message_placeholder = st.empty()
        full_response = ""
        failure: str | None = None

        def on_chunk(text: str):
            global full_response
            full_response += text
            message_placeholder.markdown(escape_markdown(full_response) + "| ")

        def on_done():
            message_placeholder.markdown(escape_markdown(full_response))

        def on_error(message: str):
            global failure
            failure = message

        with st.spinner("Thinking...", show_time=True):
            stream_chat(prompt, history, on_chunk, on_done, on_error)

        if full_response:
            st.session_state.history.append(ChatTurn(role="assistant", content=full_response))

        if failure is not None:
            logger.error(f"Chat failed: {failure}")
            st.error(f"Error: {failure}")
            st.stop()

    st.rerun()
