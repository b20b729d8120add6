"""
Server-Sent Events framing for the chat token stream.

Wire format, one event per line pair:
    data: {"token": "..."}
    data: {"error": "..."}
    data: [DONE]
"""
import json
import structlog
from typing import Any, Dict, Iterable, Iterator

from revyn_audit.core.exceptions import ChatSessionError

logger = structlog.get_logger(__name__)

DATA_PREFIX = "data:"
DONE_MARKER = "[DONE]"
DONE_EVENT = f"data: {DONE_MARKER}\n\n"


def format_sse(payload: Dict[str, Any]) -> str:
    return f"data: {json.dumps(payload)}\n\n"


def token_event(token: str) -> str:
    return format_sse({"token": token})


def error_event(message: str) -> str:
    return format_sse({"error": message})


def iter_sse_tokens(lines: Iterable[str]) -> Iterator[str]:
    """
    Yield tokens from a stream of SSE lines until [DONE].

    Blank lines and lines without the data prefix are ignored. Lines that
    are not valid JSON are skipped with a warning.

    Raises:
        ChatSessionError: the stream carried an error payload.
    """
    for line in lines:
        line = line.strip()
        if not line.startswith(DATA_PREFIX):
            continue
        data = line[len(DATA_PREFIX):].strip()
        if data == DONE_MARKER:
            return
        try:
            parsed = json.loads(data)
        except json.JSONDecodeError:
            logger.warning("sse_line_unparsable", line=line[:200])
            continue
        if not isinstance(parsed, dict):
            continue
        if parsed.get("token"):
            yield parsed["token"]
        elif parsed.get("error"):
            raise ChatSessionError(parsed["error"])
