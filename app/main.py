import logging
import logging.config

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.routers.export import router as export_router
from app.routers.extract import limiter, router as extract_router
from app.routers.preview import router as preview_router

SERVICE_NAME = "readme-landing"

# One JSON object per line on stderr.  Heuristic decisions inside the
# extractors are logged at DEBUG; raise "app.services" to see them.
LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "format": (
                '{"time": "%(asctime)s", "level": "%(levelname)s", '
                '"logger": "%(name)s", "message": "%(message)s"}'
            ),
        },
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "json"},
    },
    "loggers": {
        "app.services": {"level": "INFO"},
    },
    "root": {"level": "INFO", "handlers": ["console"]},
}

logging.config.dictConfig(LOGGING_CONFIG)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="README → Landing API",
    description=(
        "Turns a project README into a structured landing-page model, "
        "a rendered preview, or a downloadable static page."
    ),
    version="1.0.0",
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})


for router in (extract_router, preview_router, export_router):
    app.include_router(router)


@app.get("/", summary="Health check")
async def root() -> dict:
    return {"service": SERVICE_NAME, "status": "ok"}
