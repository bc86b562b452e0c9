# main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from landscape.config import Config
from landscape.routes import design
from landscape.services.sessions import SessionStore


def configure_logging(config: Config) -> None:
    logging.basicConfig(
        level=logging.DEBUG if config.DEBUG else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(config: Optional[Config] = None, client: Optional[httpx.AsyncClient] = None) -> FastAPI:
    config = config or Config.from_env()
    configure_logging(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_client = client is None
        http = client or httpx.AsyncClient(timeout=config.REQUEST_TIMEOUT_SECONDS)
        app.state.sessions = SessionStore(config, http)
        try:
            yield
        finally:
            if owns_client:
                await http.aclose()

    app = FastAPI(title="Landscape Design Pipeline", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(design.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
