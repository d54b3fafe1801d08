"""
Ember — Application Factory
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import time
import logging

from config import settings

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s | %(levelname)s | %(message)s")
log = logging.getLogger(__name__)

API_VERSION = "1.0.0"


def create_app() -> FastAPI:
    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        version=API_VERSION,
        description="The Ember Method: wellness assessment, protocols, daily planner, check-ins and journal.",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Content-Type"],
        expose_headers=["Content-Disposition", "X-Process-Time-Ms"],
    )

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = (time.perf_counter() - start) * 1000
        response.headers["X-Process-Time-Ms"] = f"{elapsed:.2f}"
        return response

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        log.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Something went wrong. Please try again."})

    @app.on_event("startup")
    async def startup():
        from database import init_db
        import models  # ensure all models are registered
        await init_db()
        log.info("%s API %s started (%s).", settings.APP_NAME, API_VERSION, settings.ENV)

    @app.get("/health", tags=["Health"])
    async def health_check():
        return {"status": "ok", "version": API_VERSION}

    from routes import auth_router, assessment_router, planner_router, progress_router, journal_router
    app.include_router(auth_router, prefix="/auth", tags=["Auth"])
    app.include_router(assessment_router, prefix="/assessment", tags=["Assessment"])
    app.include_router(planner_router, prefix="/planner", tags=["Planner"])
    app.include_router(progress_router, prefix="/progress", tags=["Progress"])
    app.include_router(journal_router, prefix="/journal", tags=["Journal"])

    return app


app = create_app()
