import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, Response

from leaderboard_api.load_secrets import log_level, redis_url
from leaderboard_api.models.dc_models import MessageModel
from leaderboard_api.routers import leaderboard

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}
DEFAULT_MESSAGE = MessageModel(message="Leaderboard API")

logging.basicConfig(level=log_level)


@asynccontextmanager
async def lifespan(app):
    """Log server start and stop.
    The store is not contacted here, each request opens its own client.
    """
    if not redis_url:
        logging.warning("REDIS_URL is not set, store requests will fail")
    logging.info("Start Server")
    try:
        yield
    finally:
        logging.info("Stop Server")


app = FastAPI(lifespan=lifespan)


@app.middleware("http")
async def cors_headers(request: Request, call_next):
    # Pre-flight requests never reach the routes.
    if request.method == "OPTIONS":
        return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)
    response = await call_next(request)
    if response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        # Methods the catch-all route does not list, e.g. TRACE.
        return JSONResponse(content=DEFAULT_MESSAGE.model_dump(), headers=CORS_HEADERS)
    response.headers.update(CORS_HEADERS)
    return response


@app.exception_handler(Exception)
async def server_error_handler(request: Request, exc: Exception):
    # Runs outside the http middleware, so the headers are set here too.
    logging.error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Server error"},
        headers=CORS_HEADERS,
    )


app.include_router(leaderboard.leaderboard_router)


# Registered last so that the leaderboard routes match first.
@app.api_route(
    "/{path:path}",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"],
    response_model=MessageModel,
    include_in_schema=False,
)
async def default_response(path: str):
    return DEFAULT_MESSAGE
