# myflix/core/errors.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class MyFlixError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(MyFlixError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(MyFlixError):
    # the original API answered duplicate usernames with a plain 400
    status_code = status.HTTP_400_BAD_REQUEST


class PermissionDeniedError(MyFlixError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str = "Permission denied."):
        super().__init__(detail)


class StorageError(MyFlixError):
    status_code = status.HTTP_502_BAD_GATEWAY


def _field_name(loc) -> str:
    # drop the "body"/"path"/"query" prefix FastAPI puts in front of the field
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts)


def _clean_message(msg: str) -> str:
    prefix = "Value error, "
    return msg[len(prefix):] if msg.startswith(prefix) else msg


async def handle_validation_error(request: Request, exc: RequestValidationError):
    errors = [
        {"field": _field_name(err["loc"]), "msg": _clean_message(err["msg"])}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content={"errors": errors},
    )


async def handle_myflix_error(request: Request, exc: MyFlixError):
    if isinstance(exc, StorageError):
        logger.error("%s %s: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error."},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(MyFlixError, handle_myflix_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
