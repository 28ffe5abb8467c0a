"""
Logging wiring for displaystage.

Every record carries the package version after its timestamp. The commit
engine logs under `displaystage.staging` with a bracketed tag leading each
message (`[STAGE]`, `[COMMIT]`, `[CANCEL]`). The engine can be given its own
level, and its tags can be narrowed, so a draft can be traced at DEBUG while
topology backends stay at the configured root level.
"""

from __future__ import annotations

import logging
from typing import Iterable

from displaystage import __version__
from displaystage.common.config import ConfigLoader, LoggingConfig

__all__ = [
    "ENGINE_LOGGER_NAME",
    "ENGINE_LOG_TAGS",
    "EngineTagFilter",
    "handlers_build",
    "logFormatWithVersion_get",
    "logging_setup",
]

ENGINE_LOGGER_NAME: str = "displaystage.staging"
ENGINE_LOG_TAGS: tuple[str, ...] = ConfigLoader.ENGINE_LOG_TAGS


def messageTag_get(record: logging.LogRecord) -> str | None:
    """Bracketed tag leading a record's message, if any."""
    message = str(record.msg)
    if not message.startswith("["):
        return None
    end = message.find("]")
    if end < 0:
        return None
    return message[1:end]


class EngineTagFilter(logging.Filter):
    """Pass engine records only when their tag is enabled; others always pass."""

    def __init__(self, tags: Iterable[str]) -> None:
        super().__init__()
        self._tags: frozenset[str] = frozenset(tag.upper() for tag in tags)

    @property
    def tags(self) -> frozenset[str]:
        return self._tags

    def filter(self, record: logging.LogRecord) -> bool:
        if not record.name.startswith(ENGINE_LOGGER_NAME):
            return True
        tag = messageTag_get(record)
        if tag is None or tag not in ENGINE_LOG_TAGS:
            return True
        return tag in self._tags


def handlers_build(logging_config: LoggingConfig) -> list[logging.Handler]:
    """
    Build root handlers for the configured destinations.

    Args:
        logging_config:
            Loaded logging section.

    Returns:
        Stream handler, plus a file handler when a log file is configured,
        each carrying the engine tag filter when tags are narrowed.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if logging_config.file:
        handlers.append(logging.FileHandler(logging_config.file))

    if logging_config.engine_tags is not None:
        tag_filter = EngineTagFilter(logging_config.engine_tags)
        for handler in handlers:
            handler.addFilter(tag_filter)
    return handlers


def logging_setup(logging_config: LoggingConfig) -> None:
    """
    Configure root logging and the commit engine's logger.

    Args:
        logging_config:
            Loaded logging section; `engine_level` of None leaves the engine
            at the root level.
    """
    logging.basicConfig(
        level=getattr(logging, logging_config.level.upper()),
        format=logFormatWithVersion_get(logging_config.format),
        handlers=handlers_build(logging_config),
    )

    if logging_config.engine_level is not None:
        logging.getLogger(ENGINE_LOGGER_NAME).setLevel(
            getattr(logging, logging_config.engine_level.upper())
        )


def logFormatWithVersion_get(log_format: str) -> str:
    """Tag the timestamp in a formatter string with the package version."""
    return log_format.replace("%(asctime)s", f"%(asctime)s [v{__version__}]")
