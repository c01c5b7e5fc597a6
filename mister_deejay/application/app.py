from __future__ import annotations

import time
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy import text

from mister_deejay.container import Container
from mister_deejay.domain.errors import StoreError
from mister_deejay.infrastructure.db.engine import _mask_password
from mister_deejay.infrastructure.db.orm import TEXT_COLUMN_WIDTH
from mister_deejay.infrastructure.request_context import (
    REQUEST_ID_HEADER,
    bind_request_context,
    clear_request_context,
    resolve_request_id,
)
from mister_deejay.infrastructure.settings import Settings
from mister_deejay.infrastructure.web.pages import router as pages_router

log = structlog.stdlib.get_logger()


class App:
    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or Settings()
        self._container = Container()
        self._container.config.from_pydantic(self._settings)
        self._container.wire()
        log.info("app.db.configured", url=_mask_password(self._settings.database_url))

        # Fail at start-up on bad bounds rather than on the first request
        bounds = self._container.bounds()
        if bounds.max_length > TEXT_COLUMN_WIDTH:
            log.warning(
                "app.config.message_max_exceeds_column",
                message_max_length=bounds.max_length,
                column_width=TEXT_COLUMN_WIDTH,
            )

        self._fastapi = FastAPI(
            title="Mister Deejay",
            description="""
A two-page site with a server-validated contact form.

* **Home** - landing page
* **Contact** - submit a name, email and record request; valid submissions are
  stored in the `messages` table
            """,
            version="1.0.0",
            openapi_tags=[
                {"name": "pages", "description": "Server-rendered HTML pages"},
                {"name": "contact", "description": "Contact form configuration"},
                {"name": "health", "description": "Health check endpoints for monitoring"},
            ],
            lifespan=self._lifespan,
        )
        self._fastapi.include_router(pages_router)
        self._fastapi.middleware("http")(self._logging_middleware)
        self._fastapi.add_exception_handler(StoreError, self._store_error_handler)
        self._fastapi.get(
            "/health",
            tags=["health"],
            summary="Health check",
            response_description="Service health status",
        )(self._health_check)

    @property
    def fastapi(self) -> FastAPI:
        return self._fastapi

    @property
    def container(self) -> Container:
        return self._container

    @property
    def settings(self) -> Settings:
        return self._settings

    async def __call__(self, scope, receive, send) -> None:
        await self._fastapi(scope, receive, send)

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        log.info("app.started")
        yield
        await self._container.engine().dispose()
        log.info("app.shutdown")

    async def _health_check(self) -> dict:
        """Health check endpoint for Docker/Kubernetes liveness probes."""
        async with self._container.engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
        return {"status": "healthy"}

    @staticmethod
    async def _store_error_handler(request: Request, exc: StoreError) -> Response:
        log.error(
            "request.store_failed",
            error=str(exc),
            error_type=type(exc).__name__,
            cause_type=type(exc.cause).__name__,
        )
        return PlainTextResponse("Internal Server Error", status_code=500)

    @staticmethod
    async def _logging_middleware(request: Request, call_next) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER.lower()))
        bind_request_context(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        start = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed_ms = round((time.perf_counter() - start) * 1000, 2)

            if response.status_code >= 500:
                log.error("request.completed", status_code=response.status_code, elapsed_ms=elapsed_ms)
            elif response.status_code >= 400:
                log.warning("request.completed", status_code=response.status_code, elapsed_ms=elapsed_ms)
            else:
                log.info("request.completed", status_code=response.status_code, elapsed_ms=elapsed_ms)

            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        except Exception as e:
            elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
            log.error(
                "request.failed",
                elapsed_ms=elapsed_ms,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise
        finally:
            clear_request_context()
