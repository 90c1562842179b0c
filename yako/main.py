"""
Yako chat relay — FastAPI entry point.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from loguru import logger

from yako.config import Settings, settings as default_settings
from yako.errors import InternalError, InvalidInput
from yako.middleware.error_handler import (
    global_exception_handler,
    internal_error_handler,
    invalid_input_handler,
)
from yako.middleware.logging_middleware import logging_middleware
from yako.models.schemas import HealthResponse
from yako.services.ai_service import ProviderClient, ResponseGenerator
from yako.services.chat_service import ChatOrchestrator
from yako.services.fallback_service import FallbackGenerator
from yako.services.knowledge_service import KnowledgeBase
from yako.services.rule_engine import RuleEngine
from yako.services.session_store import SessionStore

# ── Routes ───────────────────────────────────────────────
from yako.routes.chat import router as chat_router
from yako.routes.provider import router as provider_router
from yako.routes.static import router as static_router


def build_chat_service(
    settings: Settings,
    provider: ProviderClient,
    knowledge: Optional[KnowledgeBase] = None,
    fallback: Optional[FallbackGenerator] = None,
    rules: Optional[RuleEngine] = None,
) -> ChatOrchestrator:
    """Wire the chat pipeline from settings; components can be swapped for tests."""
    if knowledge is None:
        knowledge = KnowledgeBase.from_file(settings.KNOWLEDGE_BASE_PATH)
    responder = ResponseGenerator(
        provider=provider,
        knowledge=knowledge,
        fallback=fallback or FallbackGenerator(),
        system_message=settings.SYSTEM_MESSAGE,
        top_k=settings.RAG_TOP_K,
        window=settings.PROMPT_WINDOW,
    )
    return ChatOrchestrator(
        sessions=SessionStore(limit=settings.HISTORY_LIMIT),
        rules=rules or RuleEngine(),
        responder=responder,
        default_session_id=settings.DEFAULT_SESSION_ID,
    )


# ── Lifespan ─────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"System message: {settings.SYSTEM_MESSAGE}")
    if app.state.provider.configured:
        logger.info(f"Provider API key available: yes (model {settings.PROVIDER_MODEL})")
    else:
        logger.warning("No API key found. Set GROQ_API_KEY in your .env file to use AI responses.")
    logger.info(f"Server running on http://{settings.HOST}:{settings.PORT}")
    yield
    logger.info("Server shutting down gracefully...")


def create_app(
    settings: Optional[Settings] = None,
    provider: Optional[ProviderClient] = None,
    chat_service: Optional[ChatOrchestrator] = None,
) -> FastAPI:
    settings = settings or default_settings
    provider = provider or ProviderClient.from_settings(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Chat relay with rule-based answers, RAG context and an LLM provider fallback chain",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.provider = provider
    app.state.chat_service = chat_service or build_chat_service(settings, provider)

    # ── Errors ───────────────────────────────────────────
    app.add_exception_handler(InvalidInput, invalid_input_handler)
    app.add_exception_handler(InternalError, internal_error_handler)

    # ── CORS ─────────────────────────────────────────────
    origins = settings.CORS_ORIGINS.split(",") if settings.CORS_ORIGINS != "*" else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Custom Middleware ────────────────────────────────
    app.middleware("http")(global_exception_handler)
    app.middleware("http")(logging_middleware)

    # ── Register Routers ─────────────────────────────────
    app.include_router(chat_router)
    app.include_router(provider_router)
    app.include_router(static_router)

    # ── Health Check ─────────────────────────────────────
    @app.get("/api/health", response_model=HealthResponse, tags=["health"])
    async def health():
        return HealthResponse(
            status="ok",
            timestamp=datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        )

    # ── Static UI (mounted last so API routes win) ───────
    static_dir = Path(settings.STATIC_DIR)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    return app


app = create_app()


def run():
    import uvicorn

    uvicorn.run(
        "yako.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.DEBUG,
        log_level="info",
    )


# ── Run ──────────────────────────────────────────────────
if __name__ == "__main__":
    run()
