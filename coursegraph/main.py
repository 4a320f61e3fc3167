import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from coursegraph.api.routes import router as api_router
from coursegraph.core.config import get_settings
from coursegraph.core.errors import CatalogLoadError, CourseGraphError
from coursegraph.core.observability import setup_logging
from coursegraph.core.store import get_store
from coursegraph.services.loader import load_catalog_file

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    if settings.catalog_path:
        store = get_store()
        try:
            with store.lock:
                load_catalog_file(settings.catalog_path, store.catalog)
        except CatalogLoadError as exc:
            # Start with an empty catalog; uploads can still populate it
            logger.error("%s", exc.message, extra={"error_code": exc.code})
    logger.info("CourseGraph API started")
    yield
    logger.info("CourseGraph API shutting down")


app = FastAPI(title="CourseGraph API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.exception_handler(CourseGraphError)
async def coursegraph_error_handler(request: Request, exc: CourseGraphError):
    logger.warning(
        "%s: %s", exc.code, exc.message,
        extra={"error_code": exc.code, "path": request.url.path, "course_id": exc.course_id},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": "validation",
                "details": [
                    {
                        "field": ".".join(str(loc) for loc in e["loc"]),
                        "message": e["msg"],
                        "type": e["type"],
                    }
                    for e in exc.errors()
                ],
            },
        },
    )


@app.get("/health")
def health_check():
    return {"status": "ok"}
