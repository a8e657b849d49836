"""Logging utilities.

Records carry the wizard session id and step so a multi-session API log can be split per
article. Outline edits log at DEBUG; the drag endpoints fire on every pointer move, so the
HTTP and SDK request loggers are held at WARNING unless the app itself runs at DEBUG.
"""

from __future__ import annotations

import contextlib
import contextvars
import logging
from enum import Enum
from typing import Any

from rich.logging import RichHandler


_session_var: contextvars.ContextVar[str] = contextvars.ContextVar("blogweaver_session", default="-")
_step_var: contextvars.ContextVar[str] = contextvars.ContextVar("blogweaver_step", default="-")

# per-request INFO chatter from the web and LLM stack
CHATTY_LOGGERS = ("httpx", "openai", "uvicorn.access")


class _ContextFilter(logging.Filter):
    """Inject wizard session context into log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.session = _session_var.get()  # type: ignore[attr-defined]
        record.step = _step_var.get()  # type: ignore[attr-defined]
        return True


def _step_name(step: Enum | str | None) -> str:
    if step is None:
        return _step_var.get()
    return str(step.value) if isinstance(step, Enum) else step


@contextlib.contextmanager
def session_context(*, session_id: str, step: Enum | str | None = None) -> Any:
    """Temporarily bind wizard session context for structured logging.

    Args:
        session_id: Wizard session identifier.
        step: Wizard step (a ``GenerationStep`` or its name). Keeps the outer step if omitted.
    """

    token_session = _session_var.set(session_id)
    token_step = _step_var.set(_step_name(step))
    try:
        yield
    finally:
        _session_var.reset(token_session)
        _step_var.reset(token_step)


def configure_logging(level: str = "INFO") -> None:
    """Configure application logging.

    Args:
        level: Logging level name.
    """

    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s session=%(session)s step=%(step)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root = logging.getLogger()
    root.setLevel(level)
    handler = next((h for h in root.handlers if isinstance(h, RichHandler)), None)
    if handler is None:
        handler = RichHandler(rich_tracebacks=True, show_time=True, show_level=True)
        root.addHandler(handler)
    if not any(isinstance(f, _ContextFilter) for f in handler.filters):
        handler.addFilter(_ContextFilter())
    handler.setFormatter(formatter)

    chatty_level = logging.DEBUG if root.level <= logging.DEBUG else logging.WARNING
    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(chatty_level)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""

    return logging.getLogger(name)
