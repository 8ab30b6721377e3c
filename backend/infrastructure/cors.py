"""
CORS par chemin: les routes du widget integre acceptent toute origine,
le reste de l'API suit CORS_ALLOW_ORIGINS.

Le widget tourne sur le site du client; le controle des domaines
autorises est fait par chatbot dans l'admission, pas par CORS.
"""

from typing import Sequence

from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

WIDGET_PATH_PREFIXES = ("/api/chat",)


def is_widget_path(path: str, prefixes: Sequence[str] = WIDGET_PATH_PREFIXES) -> bool:
    return any(path == prefix or path.startswith(f"{prefix}/") for prefix in prefixes)


class WidgetAwareCORSMiddleware:
    """
    Deux politiques CORS derriere un seul middleware.

    Usage:
        app.add_middleware(
            WidgetAwareCORSMiddleware,
            allow_origins=settings.CORS_ALLOW_ORIGINS,
            allow_credentials=True,
        )
    """

    def __init__(
        self,
        app: ASGIApp,
        allow_origins: Sequence[str] = (),
        allow_credentials: bool = False,
        allow_methods: Sequence[str] = ("GET",),
        allow_headers: Sequence[str] = (),
        widget_prefixes: Sequence[str] = WIDGET_PATH_PREFIXES,
    ):
        self._widget_prefixes = tuple(widget_prefixes)
        self._widget = CORSMiddleware(
            app,
            allow_origins=["*"],
            allow_credentials=False,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["Content-Type"],
        )
        self._default = CORSMiddleware(
            app,
            allow_origins=allow_origins,
            allow_credentials=allow_credentials,
            allow_methods=allow_methods,
            allow_headers=allow_headers,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and is_widget_path(scope["path"], self._widget_prefixes):
            await self._widget(scope, receive, send)
            return
        await self._default(scope, receive, send)
