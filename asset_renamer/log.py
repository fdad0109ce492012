from __future__ import annotations

import logging
from typing import Callable, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """Send log records to stderr with the application's format."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    root = logging.getLogger()
    if not any(getattr(h, "_asset_renamer", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._asset_renamer = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(level)


class CallbackLogHandler(logging.Handler):
    """Forward formatted log lines to a callable, e.g. a status bar."""

    def __init__(self, callback: Callable[[str], None]):
        super().__init__()
        self._callback = callback

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._callback(self.format(record))
        except Exception:
            self.handleError(record)
