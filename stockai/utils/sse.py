from stockai.constants.api import SSE_DATA_PREFIX
from stockai.models.api import StreamEvent


def sse_format(payload: StreamEvent) -> str:
    return f"{SSE_DATA_PREFIX}{payload.model_dump_json(exclude_unset=True)}\n\n"
