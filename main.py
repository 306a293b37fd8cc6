import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from moodjournal.auth import routes as auth_router
from moodjournal.profiles import routes as profiles_router
from moodjournal.journals import routes as journals_router
from moodjournal.analysis import routes as analysis_router
from moodjournal.analysis.errors import AnalysisError
from moodjournal.core.config import get_settings
from moodjournal.core.database import Base, engine

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Mood Journal API",
    version="1.0.0",
    description="Backend for the mood journal: entries, mood reflections, personalization and outreach drafts.",
)


# Must be registered before CORS so CORS wraps it
@app.middleware("http")
async def unhandled_error_middleware(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception(f"{request.method} {request.url.path} raised an unhandled error")
        return JSONResponse(status_code=500, content={"error": "Unknown error occurred"})


# CORS config
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Analysis routes answer malformed bodies with 400 `{error}`; the rest keep FastAPI's 422."""
    if not request.url.path.startswith("/analysis"):
        return await request_validation_exception_handler(request, exc)

    logger.warning(f"Invalid request body on {request.url.path}: {exc.errors()}")
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = first.get("msg", "Invalid request body")
    return JSONResponse(
        status_code=400,
        content={"error": f"Invalid request body: {field} {message}" if field else f"Invalid request body: {message}"},
    )


# Routers
app.include_router(auth_router.router)
app.include_router(profiles_router.router)
app.include_router(journals_router.router)
app.include_router(analysis_router.router)


@app.get("/health", tags=["System"], summary="Liveness check")
def health() -> dict:
    return {"status": "ok"}


# DB Tables
@app.on_event("startup")
def create_tables():
    Base.metadata.create_all(bind=engine)
