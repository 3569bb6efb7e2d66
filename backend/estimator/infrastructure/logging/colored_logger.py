"""Colored operation logger — ANSI-colored console logging for record operations.

Every mutation of a user's collection is a read → change → full write cycle;
this logger makes each stage easy to follow in the terminal.

Color scheme:
    🔵 Blue    — Read / List
    🟢 Green   — Create / Upsert
    🟡 Yellow  — Update
    🟣 Magenta — Delete
    🔴 Red     — Errors
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    GRAY = "\033[90m"


class RecordStage:
    """Predefined operation stages with colors and icons."""

    LIST = ("LIST", _Colors.BLUE, "📋")
    UPSERT = ("UPSERT", _Colors.GREEN, "💾")
    CREATE = ("CREATE", _Colors.GREEN, "🆕")
    UPDATE = ("UPDATE", _Colors.YELLOW, "✏️")
    DELETE = ("DELETE", _Colors.MAGENTA, "🗑️")


class OperationLogger:
    """Color-coded logger for record operations.

    Usage:
        log = OperationLogger("RecordCollectionService")
        with log.timed_step(RecordStage.UPSERT, "Saving supplier", user=user_id):
            ...
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    @staticmethod
    def _details(kwargs: dict[str, Any]) -> str:
        if not kwargs:
            return ""
        details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
        return f" {_Colors.GRAY}({details}){_Colors.RESET}"

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        self._logger.debug(
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}" + self._details(kwargs)
        )

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        self._logger.info(
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}" + self._details(kwargs)
        )

    def step_error(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        label, _, _ = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        self._logger.debug(f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}" + self._details(kwargs))

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Log start/end of an operation with elapsed time; errors are logged and re-raised."""
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(stage, f"{message} — failed after {elapsed * 1000:.1f}ms", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step_complete(stage, f"{message} — {elapsed * 1000:.1f}ms", **kwargs)
