# heritage_recipes/core/errors.py
# Error taxonomy shared by the stores/services and its HTTP mapping

from __future__ import annotations
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

log = logging.getLogger(__name__)

class RecipeAppError(Exception):
    """Base class for errors that are safe to show to the caller."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class ValidationError(RecipeAppError):
    status_code = 400

class AuthError(RecipeAppError):
    """Bad credentials or bad token. Message is always generic."""
    status_code = 401

class AuthorizationError(RecipeAppError):
    """Authenticated, but not the owner."""
    status_code = 403

class NotFoundError(RecipeAppError):
    status_code = 404

class ConflictError(RecipeAppError):
    status_code = 409

# ------------------------------
# FastAPI handlers
# ------------------------------

async def _app_error_handler(request: Request, exc: RecipeAppError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=headers)

async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")}
        for e in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": details})

async def _unhandled_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})

def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RecipeAppError, _app_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(PyMongoError, _unhandled_handler)
    app.add_exception_handler(Exception, _unhandled_handler)
