"""FastAPI application factory for CKey-Engine."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ckey_engine.common.config import get_settings
from ckey_engine.common.exceptions import CkeyError
from ckey_engine.common.logging import setup_logging
from ckey_engine.common.schemas import ErrorResponse, HealthResponse


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(CkeyError)
    async def ckey_error_handler(request: Request, exc: CkeyError):
        body = ErrorResponse(error=exc.message, code=exc.code)
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(version=settings.api_version)

    from ckey_engine.licensing.router import router as licensing_router

    app.include_router(licensing_router, prefix=settings.api_prefix, tags=["licensing"])

    return app
