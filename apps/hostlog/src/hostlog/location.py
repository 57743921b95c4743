"""
Caller location resolution.

Turns "where was this log call issued" into a portable ``file:line`` string.
Two strategies, chosen once at construction:

- PassThroughLocationProvider: trusts the caller-supplied label (production;
  stack traces there are unreliable and walking them is wasted work).
- StackLocationProvider: walks the live call stack and normalizes the file
  reference of the caller's frame (development).

Neither strategy ever raises; failures degrade to the label or ``"unknown"``.
"""

from __future__ import annotations

import inspect
import os
import re
import sysconfig
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Callable, Optional, Sequence
from urllib.parse import urlsplit

from .config.environment import EnvironmentSettings
from .config.logging import DEFAULT_FRAME_DEPTH, DEFAULT_SOURCE_ROOTS, LogSettings
from .exceptions import LocationResolutionError
from .logging import get_logger
from .models import StackFrame

logger = get_logger("hostlog.location")

UNKNOWN_LOCATION = "unknown"
UNKNOWN_LINE = "?"

# Bundler / module-loader URL prefixes, applied in order
_LOADER_PREFIXES = (
    re.compile(r"^webpack-internal:///\./"),
    re.compile(r"^webpack-internal:///"),
    re.compile(r"^file://"),
)
_STATIC_ASSET_PREFIX = re.compile(r"^/_next/static/chunks/")

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))

_PATHS = sysconfig.get_paths()
_STDLIB_DIRS = tuple({os.path.abspath(_PATHS[key]) + os.sep for key in ("stdlib", "platstdlib")})
_SITE_DIRS = tuple({os.path.abspath(_PATHS[key]) + os.sep for key in ("purelib", "platlib")})

# Takes the maximum number of frames wanted, returns them innermost first
StackCapture = Callable[[int], Sequence[StackFrame]]


@lru_cache(maxsize=16)
def _source_root_pattern(source_roots: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(root) for root in source_roots)
    return re.compile(rf"(?:^|[/\\])((?:{alternatives})[/\\].*)")


def normalize_file_reference(file_name: str, source_roots: Sequence[str] = DEFAULT_SOURCE_ROOTS) -> str:
    """
    Reduce a raw frame file reference to a project-relative path.

    >>> normalize_file_reference("file:///home/user/project/src/hooks/useAuth.ts")
    'src/hooks/useAuth.ts'
    """
    for prefix in _LOADER_PREFIXES:
        file_name = prefix.sub("", file_name, count=1)

    if file_name.startswith(("http://", "https://")):
        try:
            path = urlsplit(file_name).path
        except ValueError:
            pass
        else:
            file_name = _STATIC_ASSET_PREFIX.sub("", path, count=1)

    if source_roots:
        # Outermost known directory wins
        match = _source_root_pattern(tuple(source_roots)).search(file_name)
        if match:
            file_name = match.group(1)
    return file_name


def format_location(frame: StackFrame, source_roots: Sequence[str] = DEFAULT_SOURCE_ROOTS) -> str:
    file_name = normalize_file_reference(frame.file_name or UNKNOWN_LOCATION, source_roots)
    return f"{file_name}:{frame.line_number or UNKNOWN_LINE}"


def capture_stack(limit: Optional[int] = None) -> list[StackFrame]:
    """Frames of the live call stack, innermost first, starting at our caller.

    Awaiting coroutines are linked through ``f_back`` while they run, so the
    frame chain crosses ``await`` boundaries.
    """
    current = inspect.currentframe()
    if current is None:
        raise LocationResolutionError("interpreter does not expose stack frames")

    frames: list[StackFrame] = []
    frame = current.f_back
    try:
        while frame is not None and (limit is None or len(frames) < limit):
            frames.append(StackFrame(file_name=frame.f_code.co_filename, line_number=frame.f_lineno))
            frame = frame.f_back
    finally:
        del current, frame
    return frames


def _is_internal(file_name: str) -> bool:
    return os.path.abspath(file_name).startswith(_PACKAGE_DIR + os.sep)


def _is_runtime(file_name: str) -> bool:
    """Interpreter library code (asyncio, threading, ...), installed packages excluded."""
    path = os.path.abspath(file_name)
    return path.startswith(_STDLIB_DIRS) and not path.startswith(_SITE_DIRS)


class LocationProvider(ABC):
    """Strategy for producing the location string of a log call."""

    @abstractmethod
    async def resolve(self, label: Optional[str] = None) -> str:
        """Return the caller location; must never raise."""
        ...


class PassThroughLocationProvider(LocationProvider):
    async def resolve(self, label: Optional[str] = None) -> str:
        return label or UNKNOWN_LOCATION


class StackLocationProvider(LocationProvider):
    """Resolve the caller by position in the call stack.

    Args:
        depth: Index of the caller frame, counting this provider's frame as 0
        source_roots: Directory names that anchor project-relative paths
        capture: Stack capture function, `capture_stack` by default
    """

    def __init__(
        self,
        *,
        depth: int = DEFAULT_FRAME_DEPTH,
        source_roots: Sequence[str] = DEFAULT_SOURCE_ROOTS,
        capture: Optional[StackCapture] = None,
    ) -> None:
        self._depth = depth
        self._source_roots = tuple(source_roots)
        self._capture = capture or capture_stack

    async def resolve(self, label: Optional[str] = None) -> str:
        # The capture call must stay in this frame: `depth` counts from here.
        try:
            frames = self._capture(self._depth + 1)
            return format_location(self._select(frames), self._source_roots)
        except Exception as exc:
            logger.debug(
                "caller_location_unresolved",
                error=str(exc),
                code=getattr(exc, "code", None),
                fallback=label or UNKNOWN_LOCATION,
            )
        return label or UNKNOWN_LOCATION

    def _select(self, frames: Sequence[StackFrame]) -> StackFrame:
        if len(frames) <= self._depth:
            raise LocationResolutionError(f"stack has only {len(frames)} frames", depth=self._depth)
        frame = frames[self._depth]
        # A frame inside this package means the call chain no longer matches the depth
        if _is_internal(frame.file_name):
            raise LocationResolutionError(f"frame at depth {self._depth} is internal: {frame.file_name}", depth=self._depth)
        # Scheduled callbacks (tasks, executors) put the event loop where the caller was
        if _is_runtime(frame.file_name):
            raise LocationResolutionError(f"frame at depth {self._depth} is runtime code: {frame.file_name}", depth=self._depth)
        return frame


def build_location_provider(
    environment: EnvironmentSettings,
    log_settings: LogSettings,
    *,
    capture: Optional[StackCapture] = None,
) -> LocationProvider:
    """Pick the provider for the build mode."""
    if environment.is_development:
        return StackLocationProvider(
            depth=log_settings.frame_depth,
            source_roots=log_settings.source_roots,
            capture=capture,
        )
    return PassThroughLocationProvider()
