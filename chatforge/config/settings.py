"""
Configuration centralisee pour ChatForge AI

Ce fichier charge toutes les variables d'environnement et fournit
une interface unique pour acceder a la configuration.
"""

import os
from dotenv import load_dotenv

# Charger les variables d'environnement depuis .env
load_dotenv()


class Settings:
    """
    Classe de configuration centralisee.
    Toutes les variables d'environnement sont accessibles via cette classe.
    """

    # === PLATEFORME ===
    APP_NAME: str = os.getenv("APP_NAME", "ChatForge AI")
    APP_URL: str = os.getenv("APP_URL", "http://localhost:3000")
    CORS_ALLOW_ORIGINS: list[str] = [
        o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()
    ]
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # === CONFIGURATION LLM PROVIDER ===
    LLM_PROVIDER: str = os.getenv("LLM_PROVIDER", "mistral")  # "ollama" ou "mistral"
    MODEL_TEMPERATURE: float = float(os.getenv("MODEL_TEMPERATURE", "0.7"))

    # === CONFIGURATION OLLAMA ===
    OLLAMA_MODEL: str = os.getenv("OLLAMA_MODEL", "phi3:mini")
    OLLAMA_BASE_URL: str = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")

    # === CONFIGURATION MISTRAL ===
    MISTRAL_API_KEY: str = os.getenv("MISTRAL_API_KEY", "")
    MISTRAL_MODEL: str = os.getenv("MISTRAL_MODEL", "mistral-small-latest")

    # === CONFIGURATION POSTGRESQL ===
    POSTGRES_HOST: str = os.getenv("POSTGRES_HOST", "localhost")
    POSTGRES_PORT: str = os.getenv("POSTGRES_PORT", "5432")
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "chatforgeai")
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "postgres")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "postgres")
    DB_POOL_MIN_SIZE: int = int(os.getenv("DB_POOL_MIN_SIZE", "1"))
    DB_POOL_MAX_SIZE: int = int(os.getenv("DB_POOL_MAX_SIZE", "10"))

    # === AUTHENTIFICATION ===
    JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "change-me-in-production")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_ACCESS_TOKEN_EXPIRE_DAYS: int = int(os.getenv("JWT_ACCESS_TOKEN_EXPIRE_DAYS", "7"))
    OTP_TTL_MINUTES: int = int(os.getenv("OTP_TTL_MINUTES", "10"))
    GOOGLE_CLIENT_ID: str = os.getenv("GOOGLE_CLIENT_ID", "")
    GOOGLE_TOKENINFO_URL: str = os.getenv(
        "GOOGLE_TOKENINFO_URL", "https://oauth2.googleapis.com/tokeninfo"
    )

    # === ADMINISTRATION ===
    ADMIN_ACCESS_KEY: str = os.getenv("ADMIN_ACCESS_KEY", "")
    # Espace admin ferme tant que la cle et le secret de session ne sont pas definis
    ADMIN_ACCESS_SECRET: str = os.getenv("ADMIN_ACCESS_SECRET", "")
    ADMIN_SESSION_MINUTES: int = int(os.getenv("ADMIN_SESSION_MINUTES", "60"))
    ADMIN_COOKIE_SECURE: bool = os.getenv("ADMIN_COOKIE_SECURE", "false").lower() == "true"

    # === QUOTAS ===
    CYCLE_LENGTH_DAYS: int = int(os.getenv("CYCLE_LENGTH_DAYS", "30"))

    # === CONFIGURATION SMTP ===
    SMTP_HOST: str = os.getenv("SMTP_HOST", "")
    SMTP_PORT: int = int(os.getenv("SMTP_PORT", "465"))
    SMTP_USER: str = os.getenv("SMTP_USER", "")
    SMTP_PASSWORD: str = os.getenv("SMTP_PASSWORD", "")
    SMTP_USE_TLS: bool = os.getenv("SMTP_USE_TLS", "true").lower() == "true"
    MAIL_FROM_NAME: str = os.getenv("MAIL_FROM_NAME", "ChatForge AI")
    MAIL_FROM_ADDRESS: str = os.getenv("MAIL_FROM_ADDRESS", os.getenv("SMTP_USER", ""))

    # === PROMPTS ===
    DEFAULT_BOT_INSTRUCTIONS: str = "You are a helpful assistant."

    CHAT_SYSTEM_PROMPT_TEMPLATE: str = """You are a custom AI chatbot.

Your personality and instructions are defined as follows:
---
{instructions}
---

You must adhere to these instructions strictly.
{qa_block}"""

    CHAT_QA_BLOCK_TEMPLATE: str = """
The user has provided the following custom question and answer pairs. If the user's message is a close match to one of these questions, you MUST provide the corresponding answer exactly as written.
---
{pairs}
---
"""

    DEMO_INSTRUCTIONS: str = (
        "You are a friendly and helpful assistant for ChatForge AI, a platform that lets "
        "users build and deploy chatbots. Briefly answer questions about the product's "
        "features, pricing, and ease of use. Keep your answers concise and encouraging. "
        "If asked about something unrelated, politely steer the conversation back to ChatForge AI."
    )

    NEWSLETTER_PROMPT_TEMPLATE: str = """You are an expert email designer and copywriter.
Your task is to generate a complete, responsive, and visually appealing HTML email based on the user's prompt.
The output MUST be a single HTML file with inline CSS for maximum compatibility with email clients.
Do not use any external stylesheets or links to external assets.
Use a clean, modern design with a clear call-to-action if appropriate.
The email should be well-structured with tables for layout.
Ensure the design is professional and engaging.

The user's prompt is:
---
"{prompt}"
---
"""

    DIRECT_EMAIL_PROMPT_TEMPLATE: str = """You are an expert email copywriter for a SaaS company called ChatForge AI.
Your task is to generate a complete, responsive, and visually appealing HTML email based on the user's prompt.
The output MUST be a single HTML file with inline CSS for maximum compatibility with email clients.
Do not use any external stylesheets or links to external assets.
Use a clean, modern design.
The email should be addressed to the user by their name, which is provided.
Ensure the design is professional and engaging.

User's Name: {user_name}

The user's prompt is:
---
"{prompt}"
---
"""

    @classmethod
    def format_chat_prompt(cls, instructions: str, qa_pairs: list[tuple[str, str]]) -> str:
        """
        Formate le prompt systeme d'un chatbot.

        Args:
            instructions: Instructions libres du chatbot
            qa_pairs: Paires (question, reponse) a restituer mot pour mot

        Returns:
            Prompt systeme formate
        """
        qa_block = ""
        if qa_pairs:
            pairs = "\n".join(
                f'Question: "{question}"\nAnswer: "{answer}"'
                for question, answer in qa_pairs
            )
            qa_block = cls.CHAT_QA_BLOCK_TEMPLATE.format(pairs=pairs)
        return cls.CHAT_SYSTEM_PROMPT_TEMPLATE.format(
            instructions=instructions or cls.DEFAULT_BOT_INSTRUCTIONS,
            qa_block=qa_block,
        )

    @classmethod
    def get_postgres_uri(cls) -> str:
        """
        Construit l'URI de connexion PostgreSQL.
        Priorite a DATABASE_URL si definie.
        """
        return os.getenv(
            "DATABASE_URL",
            f"postgresql://{cls.POSTGRES_USER}:{cls.POSTGRES_PASSWORD}@"
            f"{cls.POSTGRES_HOST}:{cls.POSTGRES_PORT}/{cls.POSTGRES_DB}"
        )

    @classmethod
    def get_masked_postgres_uri(cls) -> str:
        """Retourne l'URI avec le mot de passe masque pour l'affichage."""
        uri = cls.get_postgres_uri()
        return uri.replace(cls.POSTGRES_PASSWORD, "***") if cls.POSTGRES_PASSWORD else uri


# Instance globale pour import facile
settings = Settings()
