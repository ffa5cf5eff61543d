"""
Channel-Aware Structured Logging for NATE.

Every record carries a semantic channel:

    PIPELINE   pass orchestration and timing
    SECTION    headings and the direct answer
    LINE       line decomposition and citations
    TOKEN      inline token classification
    TIMELINE   day grouping
    SYSTEM     configuration, errors, the web API

Levels are SILENT < INFO < VERBOSE < DEBUG. Records go to stderr, so CLI
output on stdout stays machine-readable.

Environment:
    NATE_LOG_LEVEL      silent | info | verbose | debug
    NATE_LOG_FORMAT     console | json
    NATE_LOG_CHANNELS   comma-separated channel names (default: all)
"""

import logging
import os
import sys
import time
from contextvars import ContextVar
from enum import Enum, IntEnum
from typing import Any, Optional, Union

import structlog


class LogLevel(IntEnum):
    SILENT = 0
    INFO = 1
    VERBOSE = 2
    DEBUG = 3

    @classmethod
    def from_string(cls, s: str) -> "LogLevel":
        """Level by name, INFO when unknown."""
        return cls.__members__.get(s.upper(), cls.INFO)


class LogChannel(str, Enum):
    PIPELINE = "PIPELINE"
    SECTION = "SECTION"
    LINE = "LINE"
    TOKEN = "TOKEN"
    TIMELINE = "TIMELINE"
    SYSTEM = "SYSTEM"

    @classmethod
    def from_string(cls, s: str) -> Optional["LogChannel"]:
        try:
            return cls(s.upper())
        except ValueError:
            return None


# Request-scoped fields merged into every event
_request_context: ContextVar[dict] = ContextVar("nate_log_context", default={})

_config = {
    "level": LogLevel.INFO,
    "format": "console",
    "channels": set(LogChannel),
    "configured": False,
}

_STDLIB_LEVELS = {
    LogLevel.SILENT: logging.CRITICAL + 10,
    LogLevel.INFO: logging.INFO,
    LogLevel.VERBOSE: logging.DEBUG,
    LogLevel.DEBUG: logging.DEBUG,
}


def configure_logging(
    level: Union[LogLevel, str, None] = None,
    format: Optional[str] = None,
    channels: Optional[list[Union[LogChannel, str]]] = None,
    force: bool = False,
) -> None:
    """
    Configure structlog and the stdlib root handler.

    Arguments left as None fall back to the NATE_LOG_* environment
    variables. A second call is a no-op unless ``force`` is set.
    """
    if _config["configured"] and not force:
        return

    if level is None:
        level = os.environ.get("NATE_LOG_LEVEL", "info")
    if isinstance(level, str):
        level = LogLevel.from_string(level)

    if format is None:
        format = os.environ.get("NATE_LOG_FORMAT", "console")

    if channels is None:
        names = os.environ.get("NATE_LOG_CHANNELS", "")
        channels = _parse_channels(names.split(",")) if names else []
    else:
        channels = _parse_channels(channels)

    _config["level"] = level
    _config["format"] = format
    _config["channels"] = set(channels or LogChannel)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=_STDLIB_LEVELS[level],
        force=True,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if format == "json":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _config["configured"] = True


def _parse_channels(values: list[Union[LogChannel, str]]) -> list[LogChannel]:
    parsed = []
    for value in values:
        channel = value if isinstance(value, LogChannel) else LogChannel.from_string(value.strip())
        if channel:
            parsed.append(channel)
    return parsed


def get_current_config() -> dict:
    """Active level, format and channels, by name."""
    return {
        "level": _config["level"].name,
        "format": _config["format"],
        "channels": sorted(ch.value for ch in _config["channels"]),
    }


# =============================================================================
# Channel Logger
# =============================================================================

class ChannelLogger:
    """
    Logger for one channel.

    info/verbose/debug are filtered by channel and level; warning and
    error are dropped only when logging is SILENT.
    """

    def __init__(
        self,
        channel: LogChannel,
        name: Optional[str] = None,
        pass_name: Optional[str] = None,
    ):
        self.channel = channel
        self.name = name or f"nate.{channel.value.lower()}"
        self.pass_name = pass_name
        self._logger = structlog.get_logger(self.name)

    def _enabled(self, level: LogLevel) -> bool:
        return self.channel in _config["channels"] and _config["level"] >= level

    def _make_event(self, **kwargs) -> dict:
        data = {"channel": self.channel.value, **kwargs}
        if self.pass_name:
            data["pass"] = self.pass_name
        data.update(_request_context.get())
        return data

    def info(self, event: str, **kwargs) -> None:
        if self._enabled(LogLevel.INFO):
            self._logger.info(event, **self._make_event(**kwargs))

    def verbose(self, event: str, **kwargs) -> None:
        if self._enabled(LogLevel.VERBOSE):
            self._logger.debug(event, **self._make_event(detail="verbose", **kwargs))

    def debug(self, event: str, **kwargs) -> None:
        if self._enabled(LogLevel.DEBUG):
            self._logger.debug(event, **self._make_event(detail="debug", **kwargs))

    def warning(self, event: str, **kwargs) -> None:
        if _config["level"] != LogLevel.SILENT:
            self._logger.warning(event, **self._make_event(**kwargs))

    def error(self, event: str, **kwargs) -> None:
        if _config["level"] != LogLevel.SILENT:
            self._logger.error(event, **self._make_event(**kwargs))


# Pass-name prefix -> channel
_PASS_CHANNELS = {
    "p00": LogChannel.PIPELINE,
    "p10": LogChannel.SECTION,
    "p20": LogChannel.SECTION,
    "p30": LogChannel.LINE,
    "p40": LogChannel.TOKEN,
    "p50": LogChannel.LINE,
    "p60": LogChannel.TIMELINE,
    "p80": LogChannel.PIPELINE,
}


def get_logger(channel: LogChannel = LogChannel.SYSTEM) -> ChannelLogger:
    """Logger for a channel, configuring logging on first use."""
    configure_logging()
    return ChannelLogger(channel=channel)


def get_pass_logger(pass_name: str) -> ChannelLogger:
    """
    Logger for a pipeline pass.

    The channel comes from the pass prefix ("p40_..." logs on TOKEN);
    unknown prefixes log on PIPELINE.
    """
    configure_logging()
    return ChannelLogger(
        channel=_PASS_CHANNELS.get(pass_name[:3], LogChannel.PIPELINE),
        name=f"nate.{pass_name}",
        pass_name=pass_name,
    )


def bind_request_context(**kwargs) -> None:
    """Add fields to every event logged in the current context."""
    _request_context.set({**_request_context.get(), **kwargs})


def clear_request_context() -> None:
    _request_context.set({})


# =============================================================================
# AnnotateLogger
# =============================================================================

class AnnotateLogger:
    """Times the passes of one annotation run under its request id."""

    def __init__(self, request_id: str):
        self.request_id = request_id
        self._log = get_logger(LogChannel.PIPELINE)
        self._started = time.perf_counter()
        self._pass_started: dict[str, float] = {}
        bind_request_context(request_id=request_id)

    def pass_start(self, pass_name: str) -> None:
        self._pass_started[pass_name] = time.perf_counter()
        self._log.verbose("pass_started", pass_name=pass_name)

    def pass_end(self, pass_name: str, **metrics: Any) -> None:
        started = self._pass_started.get(pass_name, time.perf_counter())
        self._log.verbose(
            "pass_completed",
            pass_name=pass_name,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            **metrics,
        )

    def pass_error(self, pass_name: str, error: Exception) -> None:
        self._log.error(
            "pass_failed",
            pass_name=pass_name,
            error=str(error),
            error_type=type(error).__name__,
        )

    def annotate_complete(self, status: str, **metrics: Any) -> None:
        """Log the run summary, then drop the request context."""
        self._log.info(
            "annotate_complete",
            status=status,
            total_duration_ms=round((time.perf_counter() - self._started) * 1000, 2),
            **metrics,
        )
        clear_request_context()
