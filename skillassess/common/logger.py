"""
Application Logger

All loggers of the service hang below the ``skillassess`` logger, which is
configured once from settings by ``create_app``. Records can be emitted
as plain text or as one JSON object per line.
"""

import os
import sys
import json
import time
import logging
import datetime
import functools
import asyncio
from typing import Dict, Any, Optional, Union, Callable, TypeVar

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

APP_LOGGER_NAME = "skillassess"

F = TypeVar('F', bound=Callable[..., Any])

__all__ = [
    'configure_logger',
    'ContextAdapter',
    'JsonFormatter',
    'with_context',
    'app_logger',
    'log_execution_time'
]


class JsonFormatter(logging.Formatter):
    """
    Render a record as a single JSON line.

    Fields bound with ``with_context`` arrive as ``record.context`` and are
    written next to the standard fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": datetime.datetime.fromtimestamp(record.created).isoformat(),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }
        context = getattr(record, 'context', None)
        if isinstance(context, dict):
            entry.update(context)
        if record.exc_info:
            entry["error"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logger(
    level: Union[str, int] = logging.INFO,
    use_json: bool = False,
    log_file: Optional[str] = None,
    name: str = APP_LOGGER_NAME,
) -> logging.Logger:
    """
    (Re)configure the application logger.

    Existing handlers are replaced, so calling this again (one app per test,
    for instance) does not duplicate output.

    Args:
        level: Level name or number
        use_json: Emit JSON lines instead of text
        log_file: Also write to this file when set
        name: Logger to configure
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = JsonFormatter() if use_json else logging.Formatter(TEXT_FORMAT, DATE_FORMAT)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


class ContextAdapter(logging.LoggerAdapter):
    """Attach fixed key/value context to every record as ``record.context``."""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra = dict(kwargs.get('extra') or {})
        extra['context'] = {**extra.get('context', {}), **self.extra}
        kwargs['extra'] = extra
        if self.extra:
            msg = f"{msg} [{' '.join(f'{k}={v}' for k, v in self.extra.items())}]"
        return msg, kwargs


def with_context(name: Optional[str] = None, **context) -> ContextAdapter:
    """
    Logger bound to ``context``.

    Usage:
        log = with_context(logger.name, assessment_id=assessment_id)
        log.info("Scored submission")
    """
    return ContextAdapter(logging.getLogger(name) if name else app_logger, context)


def _app_logger() -> logging.Logger:
    logger = logging.getLogger(APP_LOGGER_NAME)
    if logger.handlers:
        return logger
    return configure_logger(
        level=os.environ.get("LOG_LEVEL", "INFO"),
        use_json=os.environ.get("LOG_JSON", "false").lower() == "true",
    )


app_logger = _app_logger()


def log_execution_time(logger: Optional[logging.Logger] = None) -> Callable[[F], F]:
    """
    Log how long the decorated function or coroutine takes.

    Successful calls are logged at DEBUG; failures at ERROR before the
    exception is re-raised.
    """
    log = logger or app_logger

    def report(func: Callable, started: float, error: Optional[Exception] = None) -> None:
        elapsed = time.perf_counter() - started
        if error is None:
            log.debug(f"{func.__name__} executed in {elapsed:.3f} seconds")
        else:
            log.error(f"{func.__name__} failed after {elapsed:.3f} seconds: {error}")

    def decorator(func: F) -> F:
        if asyncio.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                started = time.perf_counter()
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    report(func, started, e)
                    raise
                report(func, started)
                return result
            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                report(func, started, e)
                raise
            report(func, started)
            return result
        return wrapper
    return decorator
