# bloglist/main.py

import logging
import time
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bloglist.api import login, posts, users
from bloglist.core.config import Settings, load_settings
from bloglist.core.errors import BloglistError, ValidationError, describe_validation_errors
from bloglist.database import create_session_factory, get_db_engine, init_db


logger = logging.getLogger(__name__)
request_logger = logging.getLogger("bloglist.requests")


# -------------------------------
# Error Translation
# -------------------------------

async def handle_bloglist_error(request: Request, exc: BloglistError):
    logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    return await handle_bloglist_error(request, ValidationError(describe_validation_errors(exc.errors())))


async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        return JSONResponse(status_code=404, content={"error": "unknown endpoint"})
    logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


# -------------------------------
# Application Factory
# -------------------------------

def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Builds the API around one Settings instance. The database engine,
    session factory and signing secret all hang off app.state so several
    apps (e.g. one per test) can live in the same process.
    """
    settings = settings or load_settings()

    engine = get_db_engine(settings.database_url)
    init_db(engine)

    app = FastAPI(title="Bloglist API")
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        if not settings.is_test:
            request_logger.info(
                "%s %s -> %s (%.1f ms)",
                request.method,
                request.url.path,
                response.status_code,
                (time.perf_counter() - started) * 1000,
            )
        return response

    app.add_exception_handler(BloglistError, handle_bloglist_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)

    app.include_router(posts.router)
    app.include_router(users.router)
    app.include_router(login.router)

    return app


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    settings = load_settings()
    app = create_app(settings)

    logger.info("Server running on port %s", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level="info")


if __name__ == "__main__":
    main()
