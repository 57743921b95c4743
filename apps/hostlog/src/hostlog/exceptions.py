"""
hostlog exception hierarchy.

Every error carries a stable `code` and a `details` mapping so that console
diagnostics stay structured. None of these escape the public façade.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class HostLogError(Exception):
    """Root of all hostlog errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


# ================================
# Command channel
# ================================


class ChannelError(HostLogError):
    """Base class for failures crossing the privileged command boundary."""

    pass


class ChannelUnavailable(ChannelError):
    """Raised when the host shell is not reachable from this process at all."""

    def __init__(self, *, command: str) -> None:
        super().__init__(
            f"Command channel unavailable for '{command}'",
            code="CHANNEL_UNAVAILABLE",
            details={"command": command},
        )


class CommandRejected(ChannelError):
    """The host received the command and refused it."""

    def __init__(
        self,
        *,
        command: str,
        reason: str,
        status_code: Optional[int] = None,
    ) -> None:
        details: Dict[str, Any] = {"command": command, "reason": reason}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(f"Command '{command}' rejected: {reason}", code="COMMAND_REJECTED", details=details)
        self.command = command
        self.reason = reason
        self.status_code = status_code


class CommandTransportError(ChannelError):
    """The command could not be delivered (connection refused, timeout, ...)."""

    def __init__(self, *, command: str, reason: str) -> None:
        super().__init__(
            f"Command '{command}' failed in transport: {reason}",
            code="COMMAND_TRANSPORT_ERROR",
            details={"command": command, "reason": reason},
        )


# ================================
# Caller resolution
# ================================


class LocationResolutionError(HostLogError):
    """No usable caller frame; always handled inside the resolver."""

    def __init__(self, reason: str, *, depth: Optional[int] = None) -> None:
        details: Dict[str, Any] = {"reason": reason}
        if depth is not None:
            details["depth"] = depth
        super().__init__(f"Caller location unresolved: {reason}", code="LOCATION_UNRESOLVED", details=details)
