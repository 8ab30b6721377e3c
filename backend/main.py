"""
Application FastAPI de ChatForge AI.

Le pool PostgreSQL est ouvert au demarrage et ferme a l'arret (lifespan);
les routes sont cablees au container DI.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from chatforge.config import settings
from backend.infrastructure.container import Container
from backend.infrastructure.cors import WidgetAwareCORSMiddleware
from backend.infrastructure.database import close_pool, open_pool
from backend.infrastructure.security import admin_access_enabled
from backend.routes import admin, auth, chat, chatbots, marketing

logger = logging.getLogger(__name__)


def create_container() -> Container:
    container = Container()
    container.config.llm_provider.from_value(settings.LLM_PROVIDER)
    return container


def create_app(container: Optional[Container] = None, manage_pool: bool = True) -> FastAPI:
    """
    Construit l'application.

    Args:
        container: Container a utiliser (les tests passent un container dont
            les providers sont surcharges)
        manage_pool: Ouvrir/fermer le pool PostgreSQL dans le lifespan
    """
    container = container or create_container()
    container.wire()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if manage_pool:
            await open_pool(container.db_pool())
        logger.info(f"{settings.APP_NAME} API demarree (LLM: {settings.LLM_PROVIDER})")
        if not admin_access_enabled():
            logger.warning("Espace admin desactive: ADMIN_ACCESS_KEY ou ADMIN_ACCESS_SECRET non defini")
        try:
            yield
        finally:
            if manage_pool:
                await close_pool(container.db_pool())
            container.unwire()

    app = FastAPI(title=f"{settings.APP_NAME} API", lifespan=lifespan)
    app.state.container = container

    # Routes du widget: toute origine; domaines controles par chatbot dans l'admission
    app.add_middleware(
        WidgetAwareCORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials="*" not in settings.CORS_ALLOW_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.include_router(chat.router, prefix="/api", tags=["chat"])
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(chatbots.router, prefix="/api", tags=["chatbots"])
    app.include_router(marketing.router, prefix="/api", tags=["marketing"])
    app.include_router(admin.router, prefix="/api/admin", tags=["admin"])

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok"}

    return app
