from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from .config import Settings, get_settings

# API routers
from .api.v1.cards import router as cards_router
from .api.v1.messages import router as messages_router
from .core.errors import register_error_handlers
from .core.logging import setup_logging
from .db.session import Database
from .providers.gemini import GeminiService


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    # Setup logging early
    setup_logging(settings.log_level)
    app = FastAPI(title="Notecards Server", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(o).rstrip("/") for o in settings.allowed_origins],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    # The frontend proxies /api/* here with the prefix stripped
    app.include_router(messages_router)
    app.include_router(cards_router)

    @app.on_event("startup")
    async def _startup() -> None:
        app.state.http_client = GeminiService.build_client(settings)
        app.state.llm = GeminiService(app.state.http_client, settings)
        app.state.db = Database(settings.database_url, echo=settings.sql_echo)
        await app.state.db.init_db()

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        # Startup may have failed part way
        client = getattr(app.state, "http_client", None)
        if client is not None:
            await client.aclose()
        db = getattr(app.state, "db", None)
        if db is not None:
            await db.dispose()

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "Hello from nodecardserver!"

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("notecards.main:app", host="0.0.0.0", port=get_settings().server_port)
