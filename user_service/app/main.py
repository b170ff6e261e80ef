import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import Settings, get_settings
from .core.database import Database
from .core.errors import NotFoundError, ServiceError
from .routers import users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup"""
    logger.info("Starting User Service...")
    app.state.database.connect()
    logger.info("User Service startup completed")
    yield
    logger.info("Shutting down User Service...")
    app.state.database.close()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    # Configure logging
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    app = FastAPI(title="User Service", version=settings.SERVICE_VERSION, lifespan=lifespan)
    app.state.database = Database(settings.DATABASE_URL, echo=settings.DEBUG)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        if request.url.path != "/health":
            logger.info(
                f"{request.method} {request.url.path} - {response.status_code} "
                f"({time.time() - start_time:.3f}s)"
            )
        return response

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        if isinstance(exc, NotFoundError):
            logger.warning(f"{request.method} {request.url.path}: {exc.message}")
        else:
            logger.error(f"{request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    # Include routers
    app.include_router(users.router, prefix=settings.API_PREFIX + "/users", tags=["users"])

    @app.get("/")
    def read_root():
        return {"message": "User Service is running!", "service": settings.SERVICE_NAME}

    @app.get("/health")
    def health_check():
        db_healthy = app.state.database.check_connection()
        return {
            "service": settings.SERVICE_NAME,
            "status": "healthy" if db_healthy else "unhealthy",
            "database": "connected" if db_healthy else "disconnected",
            "timestamp": time.time()
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run("user_service.app.main:app", host=settings.HOST, port=settings.PORT)
