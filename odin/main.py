"""Entry point for the Odin web application."""

import time
import uuid

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from common.logging_config import setup_logging
from odin.config import ODIN_HOST, ODIN_PORT
from odin.database import init_database
from odin.exceptions import (
    OdinException,
    InvalidIdentifierError,
    DataFileNotFoundError,
    TagNotFoundError,
    InvalidTagError,
    InvalidDataSeriesError,
    GeometryProjectionError,
    InvalidQueryError,
)
from odin.responses import RequestMethod, build_body
from odin.schemas.common import ErrorResponse
from odin.routes.file_routes import router as file_router
from odin.routes.tag_routes import router as tag_router

logger = setup_logging('odin')

app = FastAPI(
    title="Odin",
    description="Open data platform: datasets, files, maps and charts",
    version="1.0.0"
)


def _error_response(request: Request, status_code: int, exc: Exception, code: str) -> JSONResponse:
    kind = RequestMethod.__members__.get(request.method, RequestMethod.GET)
    error = ErrorResponse(detail=str(exc), code=code).model_dump()
    body = build_body(kind, {"status": "error", "message": str(exc)}, error=error)
    return JSONResponse(status_code=status_code, content=body)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()

    logger.info(f"Request started: {request.method} {request.url.path} [request_id={request_id}]")

    response = await call_next(request)

    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s [request_id={request_id}]"
    )

    response.headers["X-Request-ID"] = request_id

    return response


@app.on_event("startup")
async def startup_event():
    """
    Initialize the database on application startup.
    """
    logger.info("Odin starting up...")
    init_database()
    logger.info("Database initialized")


@app.exception_handler(InvalidIdentifierError)
async def invalid_identifier_handler(request: Request, exc: InvalidIdentifierError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(f"Invalid identifier: {exc} [request_id={request_id}] path={request.url.path}")
    return _error_response(request, status.HTTP_400_BAD_REQUEST, exc, "INVALID_IDENTIFIER")


@app.exception_handler(DataFileNotFoundError)
async def file_not_found_handler(request: Request, exc: DataFileNotFoundError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(f"File not found error: {exc} [request_id={request_id}] path={request.url.path}")
    return _error_response(request, status.HTTP_404_NOT_FOUND, exc, "FILE_NOT_FOUND")


@app.exception_handler(TagNotFoundError)
async def tag_not_found_handler(request: Request, exc: TagNotFoundError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(f"Tag not found error: {exc} [request_id={request_id}] path={request.url.path}")
    return _error_response(request, status.HTTP_404_NOT_FOUND, exc, "TAG_NOT_FOUND")


@app.exception_handler(InvalidTagError)
async def invalid_tag_handler(request: Request, exc: InvalidTagError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(f"Invalid tag error: {exc} [request_id={request_id}] path={request.url.path}")
    return _error_response(request, status.HTTP_400_BAD_REQUEST, exc, "INVALID_TAG")


@app.exception_handler(InvalidDataSeriesError)
async def invalid_data_series_handler(request: Request, exc: InvalidDataSeriesError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(f"Invalid data series: {exc} [request_id={request_id}] path={request.url.path}")
    return _error_response(request, status.HTTP_400_BAD_REQUEST, exc, "INVALID_DATA_SERIES")


@app.exception_handler(GeometryProjectionError)
async def geometry_projection_handler(request: Request, exc: GeometryProjectionError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(f"Geometry projection error: {exc} [request_id={request_id}] path={request.url.path}")
    return _error_response(request, status.HTTP_422_UNPROCESSABLE_ENTITY, exc, "GEOMETRY_PROJECTION")


@app.exception_handler(InvalidQueryError)
async def invalid_query_handler(request: Request, exc: InvalidQueryError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(f"Invalid query: {exc} [request_id={request_id}] path={request.url.path}")
    return _error_response(request, status.HTTP_400_BAD_REQUEST, exc, "INVALID_QUERY")


@app.exception_handler(OdinException)
async def odin_exception_handler(request: Request, exc: OdinException):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Odin exception: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, exc, "INTERNAL_ERROR")


app.include_router(file_router)
app.include_router(tag_router)


@app.get("/")
async def root():
    """
    Root endpoint for health check.
    """
    return {"message": "Odin API", "status": "running"}


@app.get("/health")
async def health_check():
    """
    Health check endpoint for Docker healthcheck.
    """
    return {"status": "healthy", "service": "odin"}


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "odin.main:app",
        host=ODIN_HOST,
        port=ODIN_PORT,
    )


if __name__ == "__main__":
    main()
