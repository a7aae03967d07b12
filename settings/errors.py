from __future__ import annotations

import logging
from typing import TypeVar

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from services.result import ErrorKind, Result

logger = logging.getLogger(__name__)

T = TypeVar("T")

GENERIC_ERROR_MESSAGE = "An error occurred processing your request."

STATUS_BY_KIND: dict[ErrorKind, int] = {
	ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
	ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
	ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
	ErrorKind.INSUFFICIENT_FUNDS: status.HTTP_400_BAD_REQUEST,
	ErrorKind.INVARIANT: status.HTTP_400_BAD_REQUEST,
}


def unwrap(result: Result[T]) -> T:
	"""
	Return the value of a successful result or raise the matching HTTPException.
	"""
	error = result.error
	if error is None:
		return result.value  # type: ignore[return-value]
	raise HTTPException(status_code=STATUS_BY_KIND[error.kind], detail=error.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
	logger.warning("Validation failed for %s %s: %s", request.method, request.url.path, exc.errors())
	return JSONResponse(
		status_code=status.HTTP_400_BAD_REQUEST,
		content={"detail": jsonable_encoder(exc.errors())},
	)


async def unhandled_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
	logger.error("An unhandled exception occurred: %s", exc, exc_info=exc)
	if exc.__cause__ is not None:
		logger.error("Inner exception: %s", exc.__cause__)
	return PlainTextResponse(GENERIC_ERROR_MESSAGE, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
	app.add_exception_handler(RequestValidationError, validation_exception_handler)
	app.add_exception_handler(Exception, unhandled_exception_handler)
