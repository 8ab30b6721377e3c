"""Repository pour les chatbots dans PostgreSQL."""

import logging
from typing import Any, Optional

from psycopg import sql
from psycopg.types.json import Jsonb
from psycopg_pool import AsyncConnectionPool

from backend.domain.models.chatbot import Chatbot, QAPair
from backend.domain.ports.chatbot_repository_port import ChatbotRepositoryPort

logger = logging.getLogger(__name__)

_COLUMNS = """
    chatbot_id, tenant_id, name, instructions, qa, welcome_message,
    color, api_key, authorized_domains, created_at
"""

UPDATABLE_FIELDS = frozenset(
    {"name", "instructions", "qa", "welcome_message", "color", "authorized_domains"}
)


def _row_to_chatbot(row) -> Chatbot:
    return Chatbot(
        chatbot_id=row[0],
        tenant_id=row[1],
        name=row[2],
        instructions=row[3],
        qa=[QAPair(question=p["question"], answer=p["answer"]) for p in (row[4] or [])],
        welcome_message=row[5],
        color=row[6],
        api_key=row[7],
        authorized_domains=list(row[8] or []),
        created_at=row[9],
    )


def _qa_to_json(qa: list[QAPair]) -> Jsonb:
    return Jsonb([{"question": p.question, "answer": p.answer} for p in qa])


class PostgresChatbotRepository(ChatbotRepositoryPort):
    """
    Acces aux chatbots dans PostgreSQL.
    Meme pattern que PostgresTenantRepository (pool partage).
    """

    def __init__(self, pool: AsyncConnectionPool):
        self._pool = pool

    async def create(self, chatbot: Chatbot) -> None:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    INSERT INTO chatbots (
                        chatbot_id, tenant_id, name, instructions, qa,
                        welcome_message, color, api_key, authorized_domains, created_at
                    ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                    """,
                    (
                        chatbot.chatbot_id,
                        chatbot.tenant_id,
                        chatbot.name,
                        chatbot.instructions,
                        _qa_to_json(chatbot.qa),
                        chatbot.welcome_message,
                        chatbot.color,
                        chatbot.api_key,
                        chatbot.authorized_domains,
                        chatbot.created_at,
                    ),
                )

        logger.info(
            f"Chatbot '{chatbot.name}' ({chatbot.chatbot_id}) created for tenant {chatbot.tenant_id}"
        )

    async def get_by_api_key(self, api_key: str) -> Optional[Chatbot]:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    f"SELECT {_COLUMNS} FROM chatbots WHERE api_key = %s",
                    (api_key,),
                )
                row = await cur.fetchone()
                return _row_to_chatbot(row) if row else None

    async def get_by_id(
        self, chatbot_id: str, tenant_id: Optional[str] = None
    ) -> Optional[Chatbot]:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                if tenant_id is None:
                    await cur.execute(
                        f"SELECT {_COLUMNS} FROM chatbots WHERE chatbot_id = %s",
                        (chatbot_id,),
                    )
                else:
                    await cur.execute(
                        f"SELECT {_COLUMNS} FROM chatbots WHERE chatbot_id = %s AND tenant_id = %s",
                        (chatbot_id, tenant_id),
                    )
                row = await cur.fetchone()
                return _row_to_chatbot(row) if row else None

    async def list_by_tenant(self, tenant_id: str) -> list[Chatbot]:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    f"""
                    SELECT {_COLUMNS} FROM chatbots
                    WHERE tenant_id = %s
                    ORDER BY created_at ASC
                    """,
                    (tenant_id,),
                )
                rows = await cur.fetchall()
                return [_row_to_chatbot(r) for r in rows]

    async def count_by_tenant(self, tenant_id: str) -> int:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    "SELECT COUNT(*) FROM chatbots WHERE tenant_id = %s",
                    (tenant_id,),
                )
                row = await cur.fetchone()
                return row[0] if row else 0

    async def update(
        self, chatbot_id: str, tenant_id: str, changes: dict[str, Any]
    ) -> Optional[Chatbot]:
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Champs non modifiables: {', '.join(sorted(unknown))}")
        if not changes:
            return await self.get_by_id(chatbot_id, tenant_id)

        values = {
            key: _qa_to_json(value) if key == "qa" else value
            for key, value in changes.items()
        }
        assignments = sql.SQL(", ").join(
            sql.SQL("{} = {}").format(sql.Identifier(key), sql.Placeholder(key))
            for key in values
        )
        query = sql.SQL(
            "UPDATE chatbots SET {assignments} "
            "WHERE chatbot_id = {chatbot_id} AND tenant_id = {tenant_id} "
            "RETURNING {columns}"
        ).format(
            assignments=assignments,
            chatbot_id=sql.Placeholder("chatbot_id"),
            tenant_id=sql.Placeholder("tenant_id"),
            columns=sql.SQL(_COLUMNS),
        )

        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    query, {**values, "chatbot_id": chatbot_id, "tenant_id": tenant_id}
                )
                row = await cur.fetchone()

        if row:
            logger.debug(f"Chatbot {chatbot_id} updated: {', '.join(sorted(changes))}")
        return _row_to_chatbot(row) if row else None

    async def set_api_key(self, chatbot_id: str, api_key: str) -> bool:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    "UPDATE chatbots SET api_key = %s WHERE chatbot_id = %s",
                    (api_key, chatbot_id),
                )
                updated = cur.rowcount > 0

        if updated:
            logger.info(f"Chatbot {chatbot_id}: API key regenerated")
        return updated

    async def delete(self, chatbot_id: str, tenant_id: Optional[str] = None) -> bool:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                if tenant_id is None:
                    await cur.execute(
                        "DELETE FROM chatbots WHERE chatbot_id = %s",
                        (chatbot_id,),
                    )
                else:
                    await cur.execute(
                        "DELETE FROM chatbots WHERE chatbot_id = %s AND tenant_id = %s",
                        (chatbot_id, tenant_id),
                    )
                deleted = cur.rowcount > 0

        if deleted:
            logger.info(f"Chatbot {chatbot_id} deleted")
        return deleted
