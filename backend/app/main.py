import json
import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import iterate_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.main import api_router
from app.core.config import settings
from app.core.exceptions import APIError

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

MAX_LOG_LINE_LENGTH = 80


def _format_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
)

if settings.all_cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.all_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def log_api_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    path = request.url.path
    if path.startswith(settings.API_PREFIX):
        duration_ms = int((time.perf_counter() - start) * 1000)
        log_line = f"{request.method} {path} {response.status_code} in {duration_ms}ms"
        if response.headers.get("content-type", "").startswith("application/json"):
            # Drain the body for the log line, then hand the same chunks back to the client.
            chunks = [chunk async for chunk in response.body_iterator]
            response.body_iterator = iterate_in_threadpool(iter(chunks))
            body = b"".join(c if isinstance(c, bytes) else c.encode() for c in chunks)
            log_line += f" :: {body.decode('utf-8', errors='replace')}"
        if len(log_line) > MAX_LOG_LINE_LENGTH:
            log_line = log_line[: MAX_LOG_LINE_LENGTH - 1] + "…"
        logger.info(log_line)
    return response


@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "code": exc.code},
        headers=exc.headers,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Server error on %s: %s", request.url.path, exc.detail)
        content = {"error": "Internal Server Error", "code": "INTERNAL_SERVER_ERROR"}
    else:
        content = {"error": str(exc.detail or "Bad Request"), "code": "CLIENT_ERROR"}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected request body on %s: %s", request.url.path, json.dumps(exc.errors(), default=str))
    return JSONResponse(
        status_code=400,
        content={"error": _format_validation_error(exc), "code": "VALIDATION_ERROR"},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error", "code": "INTERNAL_SERVER_ERROR"},
    )


app.include_router(api_router, prefix=settings.API_PREFIX)
