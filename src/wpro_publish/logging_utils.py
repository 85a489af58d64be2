"""Logging setup with bearer token redaction."""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

FILE_LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
REDACTED = "***REDACTED***"


class TokenRedactionFilter(logging.Filter):
    """Logging filter that replaces a raw token with ``***REDACTED***``."""

    def __init__(self, token: str) -> None:
        super().__init__()
        self._token = token

    def _redact(self, value: object) -> object:
        if self._token and self._token in str(value):
            return str(value).replace(self._token, REDACTED)
        return value

    def filter(self, record: logging.LogRecord) -> bool:
        if self._token and self._token in str(record.msg):
            record.msg = str(record.msg).replace(self._token, REDACTED)
        if record.args:
            args = record.args
            if isinstance(args, tuple):
                record.args = tuple(self._redact(a) for a in args)
            elif isinstance(args, dict):
                record.args = {k: self._redact(v) for k, v in args.items()}
        return True


def setup_logging(
    console: Console,
    verbose: bool = False,
    token: str = "",
    log_file: Path | None = None,
) -> None:
    """Configure root logging with RichHandler and an optional log file."""
    level = logging.DEBUG if verbose else logging.INFO
    handlers: list[logging.Handler] = [RichHandler(console=console, rich_tracebacks=True)]

    if log_file:
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        handlers.append(file_handler)

    if token:
        for handler in handlers:
            handler.addFilter(TokenRedactionFilter(token))

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)
