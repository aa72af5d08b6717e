import os
from typing import Any

from langchain.chat_models import init_chat_model
from langchain_core.language_models import BaseChatModel

CHAT_MODEL = os.getenv("CHAT_MODEL") or "openai:gpt-4o-mini"
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL") or None

TEMPERATURE = float(os.getenv("TEMPERATURE") or 0)
MAX_TOKENS = int(os.getenv("MAX_TOKENS") or 8192)


def create_chat_model() -> BaseChatModel:
    """
    Builds the upstream chat model from the environment.
    CHAT_MODEL takes a "provider:model" string, e.g. "openai:gpt-4o-mini" or "ollama:llama3.1".
    """

    kwargs: dict[str, Any] = {}
    if OPENAI_BASE_URL and CHAT_MODEL.startswith("openai"):
        kwargs["base_url"] = OPENAI_BASE_URL

    return init_chat_model(
        model=CHAT_MODEL,
        temperature=TEMPERATURE,
        max_tokens=MAX_TOKENS,
        **kwargs,
    )
