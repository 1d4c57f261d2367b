# healthbuddy/core/exceptions.py
import logging
from typing import Dict, Optional

from fastapi import status
from fastapi.responses import JSONResponse
from fastapi.requests import Request

logger = logging.getLogger(__name__)

# ---------------------------
# Raised by crud/
# ---------------------------

class DatabaseError(Exception):
    """Base class for persistence failures."""
    pass

class DatabaseConflictError(DatabaseError):
    """A unique constraint rejected the write."""
    pass

# ---------------------------
# Raised by services/
# ---------------------------

class BusinessError(Exception):
    """Base class for errors the API maps to a status code."""
    pass

class ServiceError(BusinessError):
    """Unexpected failure; answered with a generic 500."""
    pass

class NotFoundError(BusinessError):
    """Missing row, or a row owned by someone else."""
    pass

class ConflictError(BusinessError):
    """Duplicate account email."""
    pass

class PermissionError(BusinessError):
    """The request names a user other than the caller."""
    pass

class UnauthorizedError(BusinessError):
    """Bad sign-in credentials."""
    pass


# ---------------------------
# Handlers
# ---------------------------

# error class -> (status code, extra response headers)
ERROR_STATUS = {
    NotFoundError: (status.HTTP_404_NOT_FOUND, None),
    ConflictError: (status.HTTP_409_CONFLICT, None),
    PermissionError: (status.HTTP_403_FORBIDDEN, None),
    UnauthorizedError: (status.HTTP_401_UNAUTHORIZED, {"WWW-Authenticate": "Bearer"}),
}


def _detail_handler(status_code: int, headers: Optional[Dict[str, str]]):
    async def handler(request: Request, exc: BusinessError):
        return JSONResponse(status_code=status_code, content={"detail": str(exc)}, headers=headers)
    return handler


async def _service_error_handler(request: Request, exc: ServiceError):
    logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app) -> None:
    """Answer every BusinessError with `{"detail": ...}` and its status code."""
    for error_class, (status_code, headers) in ERROR_STATUS.items():
        app.add_exception_handler(error_class, _detail_handler(status_code, headers))
    app.add_exception_handler(ServiceError, _service_error_handler)
