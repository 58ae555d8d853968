from contextlib import asynccontextmanager
import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from stackhelper.api import pets
from stackhelper.config import settings
from stackhelper.database import init_database
from stackhelper.logging_config import configure_logging
from stackhelper.utils.logging_utils import set_logging_context, clear_logging_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown"""
    configure_logging()
    init_database()
    logger.info("stackhelper API started")
    yield
    logger.info("stackhelper API stopped")


def create_app() -> FastAPI:
    """
    Build the FastAPI application with every registered resource router.

    Returns:
        Configured FastAPI instance
    """
    app = FastAPI(
        title="stackhelper API",
        description="Generic CRUD endpoints over SQLAlchemy resources",
        version="1.0.0",
        lifespan=lifespan
    )

    # Configure CORS - allow all origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location", REQUEST_ID_HEADER],
    )

    @app.middleware("http")
    async def request_logging_context(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        set_logging_context(request_id=request_id, method=request.method, path=request.url.path)
        try:
            response = await call_next(request)
        finally:
            clear_logging_context()
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    app.include_router(pets.router)

    return app


app = create_app()


def main():
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
