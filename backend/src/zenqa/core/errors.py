import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> ORJSONResponse:
	"""Malformed request bodies are reported as client errors in the common envelope."""
	logger.warning(f"Rejected request to {request.url.path}: {exc.errors()}")
	return ORJSONResponse(
		status_code=400,
		content={
			"success": False,
			"error": "Invalid request body",
			"details": [
				{"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
				for err in exc.errors()
			],
		},
	)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> ORJSONResponse:
	return ORJSONResponse(
		status_code=exc.status_code,
		content={"success": False, "error": exc.detail},
		headers=getattr(exc, "headers", None),
	)


def setup_exception_handlers(app: FastAPI) -> None:
	app.add_exception_handler(RequestValidationError, validation_exception_handler)
	app.add_exception_handler(StarletteHTTPException, http_exception_handler)
