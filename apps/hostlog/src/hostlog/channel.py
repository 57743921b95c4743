"""
Privileged command channel.

The host shell exposes a small set of commands (`init_logger_cmd`,
`log_frontend_message`) that run with privileges the client lacks. Every
invocation is request/response and may fail.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

import httpx
import orjson

from .exceptions import ChannelUnavailable, CommandRejected, CommandTransportError

INIT_LOGGER_COMMAND = "init_logger_cmd"
LOG_MESSAGE_COMMAND = "log_frontend_message"


class CommandChannel(ABC):
    """Abstract boundary to the host's privileged commands."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether this process runs inside a host that can execute commands."""
        ...

    @abstractmethod
    async def invoke(self, command: str, args: Mapping[str, Any]) -> Any:
        """Run `command` on the host; raise a `ChannelError` on failure."""
        ...

    async def aclose(self) -> None:
        return None


class HttpCommandChannel(CommandChannel):
    """Commands sent as JSON over the host's local HTTP endpoint.

    ``POST {base_url}/{command}`` with the arguments as body. A non-2xx status or
    an ``{"error": ...}`` body means the host rejected the command.

    Args:
        base_url: Host endpoint; None when running outside the host shell
        timeout: Per-request timeout in seconds
        client: Pre-built client (tests inject one with a mock transport)
    """

    def __init__(
        self,
        base_url: Optional[str],
        *,
        timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/") if base_url else None
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    def is_available(self) -> bool:
        return self._base_url is not None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def invoke(self, command: str, args: Mapping[str, Any]) -> Any:
        if self._base_url is None:
            raise ChannelUnavailable(command=command)

        try:
            response = await self._get_client().post(
                f"{self._base_url}/{command}",
                content=orjson.dumps(dict(args)),
                headers={"content-type": "application/json"},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise CommandRejected(
                command=command,
                reason=exc.response.text or exc.response.reason_phrase,
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise CommandTransportError(command=command, reason=str(exc) or type(exc).__name__) from exc

        if not response.content:
            return None
        try:
            payload = orjson.loads(response.content)
        except orjson.JSONDecodeError as exc:
            raise CommandRejected(command=command, reason="malformed response body", status_code=response.status_code) from exc

        if isinstance(payload, dict) and payload.get("error"):
            raise CommandRejected(command=command, reason=str(payload["error"]), status_code=response.status_code)
        return payload

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
