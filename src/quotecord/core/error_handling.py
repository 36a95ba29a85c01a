"""Structured logging for failures, raised or recovered."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


def _format_context(context: Mapping[str, object]) -> str:
    """Render structured context as a stable key-value string."""
    return ", ".join(f"{key}={context[key]!r}" for key in sorted(context))


def _compose(message: str, *parts: str) -> str:
    return " | ".join((message, *(part for part in parts if part)))


def log_exception(
    *,
    logger: logging.Logger,
    message: str,
    error: BaseException,
    context: Mapping[str, object] | None = None,
) -> None:
    """Log ``error`` at ERROR with its traceback and optional context."""
    logger.error(
        "%s",
        _compose(message, _format_context(context or {})),
        exc_info=error,
    )


def log_recovered(
    *,
    logger: logging.Logger,
    message: str,
    error: BaseException,
    context: Mapping[str, object] | None = None,
) -> None:
    """Log a failure that was handled with a fallback, without a traceback."""
    logger.warning(
        "%s",
        _compose(
            message,
            _format_context(context or {}),
            f"{type(error).__name__}: {error}",
        ),
    )
