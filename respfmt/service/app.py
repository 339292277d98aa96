"""FastAPI application entrypoint for respfmt service mode."""

from __future__ import annotations

import asyncio
import importlib
from typing import Any, Callable, Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigError
from ..formatting import ResponseFormatter
from ..logging import attach_server_loggers, get_logger

ReplyGenerator = Callable[[str], str]

logger = get_logger("service")


class FormatRequest(BaseModel):
    text: str


class ChatRequest(BaseModel):
    message: str = ""


class FormattedResponse(BaseModel):
    response: str


class HealthResponse(BaseModel):
    status: str


class BackendError(RuntimeError):
    """Raised when the text-generation backend fails to produce a reply."""


def create_app(
    formatter_factory: Callable[[], ResponseFormatter] = ResponseFormatter,
    generator: Optional[ReplyGenerator] = None,
) -> FastAPI:
    """Create the FastAPI application exposing the response formatter.

    ``generator`` is the upstream text-generation backend: it receives the
    user's chat message and returns the raw reply to be formatted. Without
    one, ``/api/chat/message`` answers 503 and only ``/format`` is useful.
    """

    app = FastAPI(title="respfmt", version="0.1.0")

    async def get_formatter() -> ResponseFormatter:
        return formatter_factory()

    async def _run(func: Callable[[], str]) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/format", response_model=FormattedResponse)
    async def format_text(
        payload: FormatRequest,
        formatter: ResponseFormatter = Depends(get_formatter),
    ) -> FormattedResponse:
        logger.debug("Formatting %d characters", len(payload.text))
        formatted = await _run(lambda: formatter.format(payload.text))
        return FormattedResponse(response=formatted)

    @app.post("/api/chat/message", response_model=FormattedResponse)
    async def chat_message(
        payload: ChatRequest,
        formatter: ResponseFormatter = Depends(get_formatter),
    ) -> FormattedResponse:
        if not payload.message.strip():
            raise HTTPException(status_code=400, detail="Message cannot be empty")
        if generator is None:
            raise HTTPException(status_code=503, detail="No text-generation backend configured")

        def _reply() -> str:
            try:
                raw = generator(payload.message)
            except Exception as exc:
                raise BackendError(str(exc)) from exc
            return formatter.format(raw)

        return FormattedResponse(response=await _run(_reply))

    @app.exception_handler(BackendError)
    async def backend_error_handler(_: Any, exc: BackendError) -> JSONResponse:
        logger.error("Error processing message: %s", exc, exc_info=exc.__cause__)
        return JSONResponse(
            status_code=500, content={"detail": f"Error processing message: {exc}"}
        )

    return app


def load_generator(target: str) -> ReplyGenerator:
    """Import a reply generator given as ``package.module:callable``."""
    module_path, _, attribute = target.partition(":")
    if not module_path or not attribute:
        raise ConfigError(f"Generator '{target}' must look like 'package.module:callable'")
    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        raise ConfigError(f"Cannot import generator module '{module_path}': {exc}") from exc
    generator = getattr(module, attribute, None)
    if not callable(generator):
        raise ConfigError(f"Generator '{target}' is not a callable")
    return generator


def run_service(
    host: str = "127.0.0.1",
    port: int = 8000,
    generator: Optional[ReplyGenerator] = None,
) -> None:  # pragma: no cover - integration path
    import uvicorn

    attach_server_loggers(get_logger())
    if generator is None:
        logger.warning("No reply generator configured; /api/chat/message will answer 503")
    logger.info("Serving respfmt on %s:%d", host, port)
    uvicorn.run(create_app(generator=generator), host=host, port=port, log_config=None)


__all__ = ["BackendError", "create_app", "load_generator", "run_service"]
