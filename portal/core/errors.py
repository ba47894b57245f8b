"""
Domain errors and their HTTP translation.

Services and the store raise these; main.py registers handlers that turn
them into the same {"detail": ...} body FastAPI uses for HTTPException.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class PortalError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request failed"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotAuthenticatedError(PortalError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"


class NotFoundError(PortalError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Record not found"


async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    headers = None
    if isinstance(exc, NotAuthenticatedError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PortalError, portal_error_handler)
