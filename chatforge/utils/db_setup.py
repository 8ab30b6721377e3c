"""
Script d'initialisation et de verification PostgreSQL pour ChatForge AI

Ce module fournit des fonctions pour:
1. Tester la connexion a PostgreSQL
2. Creer les tables necessaires (tenants, chatbots, submissions, subscribers)
3. Verifier que tout est pret pour le backend
"""

import psycopg

from chatforge.config import settings

SCHEMA_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS tenants (
        tenant_id TEXT PRIMARY KEY,
        email TEXT NOT NULL UNIQUE,
        password_hash TEXT,
        auth_method TEXT NOT NULL DEFAULT 'email',
        name TEXT,
        avatar TEXT,
        is_verified BOOLEAN NOT NULL DEFAULT FALSE,
        is_banned BOOLEAN NOT NULL DEFAULT FALSE,
        plan TEXT NOT NULL DEFAULT 'Free',
        message_limit INTEGER NOT NULL,
        chatbot_limit INTEGER NOT NULL,
        messages_sent INTEGER NOT NULL DEFAULT 0,
        plan_cycle_start TIMESTAMPTZ NOT NULL DEFAULT now(),
        otp TEXT,
        otp_expires TIMESTAMPTZ,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS chatbots (
        chatbot_id TEXT PRIMARY KEY,
        tenant_id TEXT NOT NULL REFERENCES tenants(tenant_id) ON DELETE CASCADE,
        name TEXT NOT NULL,
        instructions TEXT NOT NULL DEFAULT '',
        qa JSONB NOT NULL DEFAULT '[]'::jsonb,
        welcome_message TEXT NOT NULL DEFAULT '',
        color TEXT NOT NULL DEFAULT '#007BFF',
        api_key TEXT NOT NULL UNIQUE,
        authorized_domains TEXT[] NOT NULL DEFAULT '{}',
        created_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    "CREATE INDEX IF NOT EXISTS chatbots_tenant_id_idx ON chatbots (tenant_id)",
    """
    CREATE TABLE IF NOT EXISTS submissions (
        submission_id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        email TEXT NOT NULL,
        company TEXT,
        plan TEXT NOT NULL,
        message TEXT NOT NULL,
        status TEXT NOT NULL DEFAULT 'pending',
        created_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS subscribers (
        subscriber_id TEXT PRIMARY KEY,
        email TEXT NOT NULL UNIQUE,
        subscribed_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
]


def test_connection() -> bool:
    """
    Teste la connexion a PostgreSQL.

    Returns:
        bool: True si la connexion est reussie, False sinon
    """
    try:
        with psycopg.connect(settings.get_postgres_uri()):
            return True
    except psycopg.Error:
        return False


def setup_postgres() -> bool:
    """
    Cree le schema ChatForge (idempotent).

    Returns:
        bool: True si l'initialisation est reussie, False sinon
    """
    print("=" * 70)
    print("INITIALISATION POSTGRESQL POUR CHATFORGE AI")
    print("=" * 70)
    print(f"Connection: {settings.get_masked_postgres_uri()}")
    print()

    try:
        print("Test de connexion a PostgreSQL...")
        with psycopg.connect(settings.get_postgres_uri()) as conn:
            print("Connexion reussie!")

            print("\nCreation des tables...")
            with conn.cursor() as cur:
                for statement in SCHEMA_STATEMENTS:
                    cur.execute(statement)
            conn.commit()
            print("Tables creees avec succes!")

            print("\nTables PostgreSQL creees:")
            print("  - tenants: Comptes, plans et compteurs de messages")
            print("  - chatbots: Configuration des chatbots et API keys")
            print("  - submissions: Demandes de plans Pro / Enterprise")
            print("  - subscribers: Abonnes a la newsletter")

        print("\n" + "=" * 70)
        print("POSTGRESQL EST PRET!")
        print("=" * 70)
        print("\nVous pouvez maintenant lancer:")
        print("  python main.py serve")
        print()
        return True

    except psycopg.Error as e:
        print(f"\nERREUR DE CONNEXION: {e}\n")
        print("=" * 70)
        print("TROUBLESHOOTING")
        print("=" * 70)
        print("\nVerifiez que:")
        print("1. PostgreSQL est installe et demarre")
        print(f"2. La base de donnees '{settings.POSTGRES_DB}' existe")
        print("3. Les credentials dans .env sont corrects")
        print("4. Le port 5432 n'est pas bloque par un firewall")
        print()
        print("Creer la base de donnees:")
        print(f"  createdb {settings.POSTGRES_DB}")
        print()
        return False
