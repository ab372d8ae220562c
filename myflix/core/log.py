# myflix/core/log.py
import logging
import sys
import time

from fastapi import Request

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

access_logger = logging.getLogger("myflix.access")


def configure_logging(level: str = "INFO") -> None:
    """
    Send every log record to stderr through a single handler on the root logger.
    Safe to call more than once (the app factory runs on every startup).
    """
    root = logging.getLogger()
    root.setLevel(level.upper())
    for handler in root.handlers:
        if getattr(handler, "_myflix", False):
            return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._myflix = True
    root.addHandler(handler)


async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    # an exception escaping call_next ends up as a 500 from the server error handler
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        access_logger.info(
            "%s %s %s %.1fms",
            request.method,
            request.url.path,
            status_code,
            elapsed_ms,
        )
