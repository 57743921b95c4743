"""
hostlog: a logging façade for client code running inside a host shell.

Messages are mirrored to a local console and forwarded to the host's log sink
through its privileged command channel, tagged with the caller's ``file:line``.
"""

from .channel import CommandChannel, HttpCommandChannel
from .exceptions import (
    ChannelError,
    ChannelUnavailable,
    CommandRejected,
    CommandTransportError,
    HostLogError,
    LocationResolutionError,
)
from .location import (
    LocationProvider,
    PassThroughLocationProvider,
    StackLocationProvider,
    normalize_file_reference,
)
from .models import InitState, LogRecord, Severity, StackFrame
from .service import FrontendLogger, create_logger

__all__ = [
    "ChannelError",
    "ChannelUnavailable",
    "CommandChannel",
    "CommandRejected",
    "CommandTransportError",
    "FrontendLogger",
    "HostLogError",
    "HttpCommandChannel",
    "InitState",
    "LocationProvider",
    "LocationResolutionError",
    "LogRecord",
    "PassThroughLocationProvider",
    "Severity",
    "StackFrame",
    "StackLocationProvider",
    "create_logger",
    "normalize_file_reference",
]
