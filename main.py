#!/usr/bin/env python3
"""
ChatForge AI - Point d'entree principal

Usage:
    python main.py serve [--host HOST] [--port PORT]   Lance l'API HTTP
    python main.py setup-db                            Configure PostgreSQL
    python main.py embed-snippet --api-key KEY         Affiche le code d'integration
"""

import argparse
import logging
import sys

from chatforge.config import settings

# Configuration du logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
# Reduire le bruit des logs HTTP (GeneratorExit est normal lors de la fermeture du streaming)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)


def print_error(message: str):
    """Affiche un message d'erreur formate."""
    print(f"\n[ERREUR] {message}", file=sys.stderr)


def print_success(message: str):
    """Affiche un message de succes formate."""
    print(f"\n[OK] {message}")


def run_server(host: str, port: int, reload: bool = False):
    """Lance l'API FastAPI avec uvicorn."""
    try:
        import uvicorn

        print(f"Demarrage de {settings.APP_NAME} sur http://{host}:{port}")
        print(f"Provider LLM: {settings.LLM_PROVIDER}")
        print(f"PostgreSQL: {settings.get_masked_postgres_uri()}\n")

        uvicorn.run(
            "backend.main:create_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
            log_level=settings.LOG_LEVEL.lower(),
        )
    except KeyboardInterrupt:
        print("\nArret demande par l'utilisateur.")
    except ImportError as e:
        print_error(f"Erreur d'import: {e}\nVerifiez que toutes les dependances sont installees: pip install -e .")
        sys.exit(1)
    except Exception as e:
        print_error(f"Erreur inattendue: {e}")
        sys.exit(1)


def run_setup_db():
    """Configure PostgreSQL avec gestion des erreurs."""
    try:
        from chatforge.utils import setup_postgres
        success = setup_postgres()
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\nArret demande par l'utilisateur.")
        sys.exit(1)
    except ImportError as e:
        print_error(f"Erreur d'import: {e}\nVerifiez que toutes les dependances sont installees: pip install -e .")
        sys.exit(1)
    except Exception as e:
        print_error(f"Erreur inattendue: {e}")
        sys.exit(1)


def run_embed_snippet(api_key: str, variant: str, app_url: str = None):
    """Affiche le code d'integration d'un chatbot."""
    from chatforge.templates import generate_embed_scripts

    scripts = generate_embed_scripts(api_key, app_url or settings.APP_URL)
    print(getattr(scripts, variant))


def main():
    parser = argparse.ArgumentParser(
        description="ChatForge AI - CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exemples:
  python main.py serve                          # Lancer l'API sur 0.0.0.0:8000
  python main.py serve --port 8080 --reload     # Mode developpement
  python main.py setup-db                       # Initialiser PostgreSQL
  python main.py embed-snippet --api-key cfai_0123... --variant react
        """
    )

    parser.add_argument(
        "command",
        choices=["serve", "setup-db", "embed-snippet"],
        help="Commande a executer"
    )
    parser.add_argument("--host", default="0.0.0.0", help="Adresse d'ecoute (pour serve)")
    parser.add_argument("--port", type=int, default=8000, help="Port d'ecoute (pour serve)")
    parser.add_argument("--reload", action="store_true", help="Rechargement automatique (pour serve)")
    parser.add_argument("--api-key", default=None, help="API key du chatbot (pour embed-snippet)")
    parser.add_argument(
        "--variant",
        default="html",
        choices=["html", "react", "nextjs"],
        help="Variante du code d'integration (defaut: html)"
    )
    parser.add_argument("--app-url", default=None, help="URL publique de la plateforme (defaut: APP_URL)")

    # Gerer le cas ou aucun argument n'est fourni
    if len(sys.argv) == 1:
        parser.print_help()
        sys.exit(0)

    args = parser.parse_args()

    if args.command == "serve":
        run_server(args.host, args.port, reload=args.reload)

    elif args.command == "setup-db":
        run_setup_db()

    elif args.command == "embed-snippet":
        if not args.api_key:
            print_error("--api-key est requis pour embed-snippet")
            sys.exit(1)
        run_embed_snippet(args.api_key, args.variant, args.app_url)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nArret demande par l'utilisateur.")
        sys.exit(0)
    except Exception as e:
        print_error(f"Erreur fatale: {e}")
        sys.exit(1)
