import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class BookNotFound(Exception):
    def __init__(self, isbn: str):
        super().__init__(f"{isbn} not found")
        self.isbn = isbn


class StorageError(Exception):
    """The database rejected or failed to run a statement."""


class DuplicateBook(StorageError):
    def __init__(self, isbn: str):
        super().__init__(f"{isbn} already exists")
        self.isbn = isbn


def _error(status_code: int, error) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error})


async def book_not_found_handler(request: Request, exc: BookNotFound):
    return _error(status.HTTP_404_NOT_FOUND, str(exc))


async def duplicate_book_handler(request: Request, exc: DuplicateBook):
    return _error(status.HTTP_409_CONFLICT, str(exc))


async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("Storage error on %s %s: %s", request.method, request.url.path, exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database error")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        if err.get("type") == "json_invalid":
            field = "body"
        else:
            # drop the leading "body"/"path" segment
            loc = [str(part) for part in err.get("loc", ())[1:]]
            field = ".".join(loc) or "body"
        messages.append(f"{field}: {err.get('msg')}")
    return _error(status.HTTP_400_BAD_REQUEST, messages)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookNotFound, book_not_found_handler)
    app.add_exception_handler(DuplicateBook, duplicate_book_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
