"""
Chat stream client.

Consumes POST /chat/sessions/{id}/message with httpx streaming and hands
tokens to a callback as they arrive.
"""
from typing import Callable, Optional
from uuid import UUID

import httpx
import structlog

from revyn_audit.core.exceptions import ChatSessionError
from revyn_audit.services.sse import iter_sse_tokens

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = httpx.Timeout(60.0, connect=10.0)


class ChatClient:
    """Minimal client for the report chat endpoints."""

    def __init__(
        self,
        base_url: str,
        api_prefix: str = "/api/v1",
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._client = client or httpx.Client(base_url=base_url, timeout=DEFAULT_TIMEOUT)
        self._prefix = api_prefix.rstrip("/")

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ChatClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def send_message(
        self,
        session_id: UUID,
        message: str,
        on_token: Optional[Callable[[str], None]] = None,
    ) -> str:
        """
        Send a message and return the full streamed reply.

        Raises:
            ChatSessionError: non-2xx response or an error event in the stream.
        """
        url = f"{self._prefix}/chat/sessions/{session_id}/message"
        parts = []
        with self._client.stream("POST", url, json={"message": message}) as response:
            if response.status_code >= 400:
                response.read()
                raise ChatSessionError(_error_message(response), session_id=str(session_id))
            for token in iter_sse_tokens(response.iter_lines()):
                parts.append(token)
                if on_token is not None:
                    on_token(token)

        reply = "".join(parts)
        logger.debug("chat_reply_received", session_id=str(session_id), chars=len(reply))
        return reply


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP error! status: {response.status_code}"
    detail = body.get("detail", body) if isinstance(body, dict) else {}
    if isinstance(detail, dict) and detail.get("message"):
        return detail["message"]
    return f"HTTP error! status: {response.status_code}"
