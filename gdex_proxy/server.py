"""
HTTP surface of the swap proxy

Routes:
    GET  /       liveness probe
    POST /quote  price preview (0x price endpoint, verbatim)
    POST /swap   firm quote -> {"tx": {...}}

Run with:
    gdex-proxy
or:
    uvicorn gdex_proxy.server:app --port 8080
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

import uvicorn
from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from . import __version__
from .config import config, setup_logging
from .context import ServiceContext
from .errors import GdexError, ValidationError
from .modules.swap import SwapModule

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_json(request: Request) -> Any:
    """Decoded request body; malformed JSON is a client error"""
    try:
        return await request.json()
    except ValueError:
        raise ValidationError.invalid_body()


def _swap_module(request: Request) -> SwapModule:
    return SwapModule(request.app.state.context)


async def gdex_error_handler(request: Request, exc: GdexError) -> JSONResponse:
    """Map proxy errors to JSON bodies; stack traces stay in the log"""
    if isinstance(exc, ValidationError):
        logger.info(f"[{request.url.path}] rejected: {exc}")
    else:
        logger.error(f"[{request.url.path}] error {exc.status_code}: {exc}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """Liveness probe"""
    return "G-DEX backend is running."


@router.post("/quote")
async def quote(request: Request):
    """Price preview, used while the user edits the swap form"""
    body = await _read_json(request)
    try:
        price = await _swap_module(request).preview(body)
    except GdexError:
        raise
    except Exception:
        logger.exception("[/quote] unexpected error")
        return JSONResponse(status_code=500, content={"message": "Quote failed"})
    return JSONResponse(content=price)


@router.post("/swap")
async def swap(request: Request):
    """Executable transaction for the wallet to sign"""
    body = await _read_json(request)
    try:
        tx = await _swap_module(request).execute(body)
    except GdexError:
        raise
    except Exception:
        logger.exception("[/swap] unexpected error")
        return JSONResponse(status_code=500, content={"message": "Swap failed"})
    return JSONResponse(content={"tx": tx.to_dict()})


def create_app(context: Optional[ServiceContext] = None) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        context: Prebuilt service context; when None one is created from
            config at startup and closed at shutdown
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging()
        owned = app.state.context is None
        if owned:
            app.state.context = ServiceContext.from_config()
        logger.info("G-DEX backend starting")
        try:
            yield
        finally:
            logger.info("G-DEX backend shutting down")
            if owned:
                await app.state.context.aclose()
                app.state.context = None

    app = FastAPI(title="gdex-proxy", version=__version__, lifespan=lifespan)
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(GdexError, gdex_error_handler)
    app.include_router(router)
    return app


app = create_app()


def main():
    """Console entry point"""
    setup_logging()
    logger.info(f"G-DEX backend listening on port {config.server.port}")
    uvicorn.run(app, host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    main()
