"""
FastAPI streaming route for the normalizer.

Purpose
-------
Expose ``POST /api/chat/stream`` returning the normalized wire protocol as
``text/plain`` UTF-8. The body is validated into ``NormalizeRequestDTO``,
the adapter is resolved through ``ProviderFactory`` and the stream is
driven by a ``StreamController`` on a worker thread.

Fallback semantics
------------------
- Validation failures and unknown providers return HTTP 400.
- Upstream failures after the response started abort the stream; the
  multiplexer has already force-closed any open wrapper.
- A client disconnect cancels the controller so the provider stream is
  released.
"""

from __future__ import annotations

import os
from typing import Any, AsyncIterator, Callable, Dict, Optional

from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import ValidationError
from starlette.concurrency import iterate_in_threadpool

from ..base.dto import NormalizeRequestDTO
from ..base.factory import ProviderFactory, UnknownProviderError
from ..base.interfaces import IMemoryStore
from ..base.memory import InMemoryFactStore
from ..base.models import ProviderKind
from ..config import get_normalizer_config
from ..config.defaults import SERVICE_CORS_DEFAULT_ORIGINS
from ..config.settings import NormalizerSettings
from ..normalizer import normalize_stream

AdapterFactory = Callable[[ProviderKind, NormalizerSettings], Any]


def _default_adapter_factory(provider: ProviderKind, settings: NormalizerSettings) -> Any:
    return ProviderFactory.create(provider, settings=settings)


def create_app(
    *,
    memory_store: Optional[IMemoryStore] = None,
    adapter_factory: Optional[AdapterFactory] = None,
    settings: Optional[NormalizerSettings] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        memory_store: Receives memory directives; defaults to an in-process
            :class:`InMemoryFactStore`.
        adapter_factory: ``(provider, settings) -> adapter``; tests inject
            fakes here.
        settings: Normalizer tunables; resolved from config when omitted.
    """
    app = FastAPI(title="Stream Normalizer", version="0.1.0")
    store = memory_store if memory_store is not None else InMemoryFactStore()
    make_adapter = adapter_factory or _default_adapter_factory
    resolved = settings or get_normalizer_config()
    app.state.memory_store = store

    origins_env = os.getenv("NORMALIZER_SERVICE_CORS_ORIGINS", SERVICE_CORS_DEFAULT_ORIGINS)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in origins_env.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def _validation_as_400(_request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    @app.get("/api/health")
    def health() -> Dict[str, Any]:
        return {"ok": True}

    @app.post("/api/chat/stream")
    def post_chat_stream(body: Dict[str, Any] = Body(...)) -> StreamingResponse:
        """Stream one normalized response.

        Error handling:
            - Validation failures -> HTTP 400 with Pydantic error details.
            - Unknown or unconstructible provider -> HTTP 400.
        """
        try:
            dto = NormalizeRequestDTO.model_validate(body)
        except ValidationError as e:
            raise HTTPException(status_code=400, detail=e.errors(include_url=False, include_context=False)) from e
        request = dto.to_request()
        try:
            adapter = make_adapter(request.provider, resolved)
        except UnknownProviderError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        controller = normalize_stream(request, adapter=adapter, memory_store=store, settings=resolved)

        async def iter_body() -> AsyncIterator[bytes]:
            try:
                async for chunk in iterate_in_threadpool(controller.iter_bytes()):
                    yield chunk
            finally:
                if not controller.finished:
                    controller.cancel("client disconnected")
                    controller.close()

        return StreamingResponse(
            iter_body(),
            media_type="text/plain; charset=utf-8",
            headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
        )

    return app


def get_app() -> FastAPI:
    """Return the module-level application instance."""
    return app


app = create_app()


__all__ = ["app", "create_app", "get_app"]
