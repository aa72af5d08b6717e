from typing import Final

SSE_DATA_PREFIX: Final[str] = "data: "

MESSAGE_REQUIRED: Final[str] = "Message required"
CHAT_SETUP_FAILED: Final[str] = "Failed to process chat"
AI_SERVICE_ERROR: Final[str] = "AI service error"
STOCK_NOT_FOUND: Final[str] = "Stock not found"

CONNECT_FAILED: Final[str] = "Failed to connect to AI"
NETWORK_ERROR: Final[str] = "Network error"
INVALID_REQUEST: Final[str] = "Invalid chat request"
