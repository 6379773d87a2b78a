import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Only load .env file if not running on Heroku
if not os.getenv("DYNO"):  # DYNO is a Heroku-specific environment variable
    load_dotenv()

from api import generate, health, inpaint, translate
from config.settings import Settings, get_settings
from core.errors import InternalError, PromptGlotError
from core.providers import ProviderRegistry

logger = logging.getLogger("promptglot")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(PromptGlotError)
    async def promptglot_error_handler(request: Request, exc: PromptGlotError):
        if exc.status_code >= 500:
            logger.error("%s %s failed [%s]: %s", request.method, request.url.path, exc.code, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = []
        for error in exc.errors():
            field = " -> ".join(str(loc) for loc in error["loc"])
            errors.append(f"{field}: {error['msg']}")
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "; ".join(errors) or "Invalid request", "code": "VALIDATION_ERROR"},
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=InternalError().to_dict())


def create_app(settings: Optional[Settings] = None, providers: Optional[ProviderRegistry] = None) -> FastAPI:
    settings = settings or get_settings()
    providers = providers or ProviderRegistry(settings)
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        missing = [name for name, ready in providers.configuration_status().items() if not ready]
        if missing:
            logger.warning("Providers missing API keys: %s", ", ".join(missing))
        yield
        await providers.aclose()

    app = FastAPI(title="PromptGlot API", version=settings.VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.providers = providers

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include API routers
    app.include_router(health.router, prefix=settings.API_PREFIX)
    app.include_router(translate.router, prefix=settings.API_PREFIX)
    app.include_router(inpaint.router, prefix=settings.API_PREFIX)
    app.include_router(generate.router, prefix=settings.API_PREFIX)

    @app.get("/")
    async def root():
        return {"message": "PromptGlot API is running"}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
