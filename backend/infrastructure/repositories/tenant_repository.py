"""Repository pour les tenants dans PostgreSQL."""

import logging
from datetime import datetime
from typing import Optional

from psycopg_pool import AsyncConnectionPool

from backend.domain.models.plan import Plan, PlanTier
from backend.domain.models.tenant import AuthMethod, Tenant
from backend.domain.ports.tenant_repository_port import TenantRepositoryPort

logger = logging.getLogger(__name__)

_COLUMNS = """
    tenant_id, email, password_hash, auth_method, name, avatar,
    is_verified, is_banned, plan, message_limit, chatbot_limit,
    messages_sent, plan_cycle_start, otp, otp_expires, created_at
"""


def _row_to_tenant(row) -> Tenant:
    return Tenant(
        tenant_id=row[0],
        email=row[1],
        password_hash=row[2],
        auth_method=AuthMethod(row[3]),
        name=row[4],
        avatar=row[5],
        is_verified=row[6],
        is_banned=row[7],
        plan=Plan(tier=PlanTier(row[8]), message_limit=row[9], chatbot_limit=row[10]),
        messages_sent=row[11],
        plan_cycle_start=row[12],
        otp=row[13],
        otp_expires=row[14],
        created_at=row[15],
    )


class PostgresTenantRepository(TenantRepositoryPort):
    """
    Acces aux tenants dans PostgreSQL.
    Utilise psycopg3 async via le pool partage injecte par le container.
    """

    def __init__(self, pool: AsyncConnectionPool):
        self._pool = pool

    async def create(self, tenant: Tenant) -> None:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    INSERT INTO tenants (
                        tenant_id, email, password_hash, auth_method, name, avatar,
                        is_verified, is_banned, plan, message_limit, chatbot_limit,
                        messages_sent, plan_cycle_start, otp, otp_expires, created_at
                    ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                    """,
                    (
                        tenant.tenant_id,
                        tenant.email,
                        tenant.password_hash,
                        tenant.auth_method.value,
                        tenant.name,
                        tenant.avatar,
                        tenant.is_verified,
                        tenant.is_banned,
                        tenant.plan.name,
                        tenant.plan.message_limit,
                        tenant.plan.chatbot_limit,
                        tenant.messages_sent,
                        tenant.plan_cycle_start,
                        tenant.otp,
                        tenant.otp_expires,
                        tenant.created_at,
                    ),
                )

        logger.info(f"Tenant '{tenant.email}' ({tenant.tenant_id}) created")

    async def get_by_id(self, tenant_id: str) -> Optional[Tenant]:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    f"SELECT {_COLUMNS} FROM tenants WHERE tenant_id = %s",
                    (tenant_id,),
                )
                row = await cur.fetchone()
                return _row_to_tenant(row) if row else None

    async def get_by_email(self, email: str) -> Optional[Tenant]:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    f"SELECT {_COLUMNS} FROM tenants WHERE email = %s",
                    (email,),
                )
                row = await cur.fetchone()
                return _row_to_tenant(row) if row else None

    async def search(self, email_query: Optional[str] = None) -> list[Tenant]:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                if email_query:
                    await cur.execute(
                        f"""
                        SELECT {_COLUMNS} FROM tenants
                        WHERE email ILIKE %s
                        ORDER BY created_at DESC
                        """,
                        (f"%{email_query}%",),
                    )
                else:
                    await cur.execute(
                        f"SELECT {_COLUMNS} FROM tenants ORDER BY created_at DESC"
                    )
                rows = await cur.fetchall()
                return [_row_to_tenant(r) for r in rows]

    async def count(self) -> int:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute("SELECT COUNT(*) FROM tenants")
                row = await cur.fetchone()
                return row[0] if row else 0

    async def count_created_since(self, since: datetime) -> int:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    "SELECT COUNT(*) FROM tenants WHERE created_at >= %s",
                    (since,),
                )
                row = await cur.fetchone()
                return row[0] if row else 0

    async def list_created_since(self, since: datetime) -> list[Tenant]:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    f"""
                    SELECT {_COLUMNS} FROM tenants
                    WHERE created_at >= %s
                    ORDER BY created_at
                    """,
                    (since,),
                )
                rows = await cur.fetchall()
                return [_row_to_tenant(r) for r in rows]

    async def increment_if_below_limit(self, tenant_id: str) -> Optional[int]:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    UPDATE tenants SET messages_sent = messages_sent + 1
                    WHERE tenant_id = %s AND messages_sent < message_limit
                    RETURNING messages_sent
                    """,
                    (tenant_id,),
                )
                row = await cur.fetchone()

        return row[0] if row else None

    async def start_new_cycle(
        self, tenant_id: str, started_at: datetime, previous_start: datetime
    ) -> bool:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    UPDATE tenants SET messages_sent = 1, plan_cycle_start = %s
                    WHERE tenant_id = %s AND plan_cycle_start = %s
                    """,
                    (started_at, tenant_id, previous_start),
                )
                started = cur.rowcount > 0

        if started:
            logger.info(f"Tenant {tenant_id}: new usage cycle started at {started_at.isoformat()}")
        return started

    async def set_otp(
        self, tenant_id: str, otp: Optional[str], expires: Optional[datetime]
    ) -> None:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    "UPDATE tenants SET otp = %s, otp_expires = %s WHERE tenant_id = %s",
                    (otp, expires, tenant_id),
                )

    async def mark_verified(self, tenant_id: str) -> None:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    UPDATE tenants SET is_verified = TRUE, otp = NULL, otp_expires = NULL
                    WHERE tenant_id = %s
                    """,
                    (tenant_id,),
                )

    async def set_banned(self, tenant_id: str, is_banned: bool) -> bool:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    "UPDATE tenants SET is_banned = %s WHERE tenant_id = %s",
                    (is_banned, tenant_id),
                )
                return cur.rowcount > 0

    async def update_plan(self, tenant_id: str, plan: Plan) -> bool:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    UPDATE tenants SET plan = %s, message_limit = %s, chatbot_limit = %s
                    WHERE tenant_id = %s
                    """,
                    (plan.name, plan.message_limit, plan.chatbot_limit, tenant_id),
                )
                updated = cur.rowcount > 0

        if updated:
            logger.info(f"Tenant {tenant_id}: plan -> {plan.name}")
        return updated

    async def delete(self, tenant_id: str) -> bool:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    "DELETE FROM tenants WHERE tenant_id = %s",
                    (tenant_id,),
                )
                deleted = cur.rowcount > 0

        if deleted:
            logger.info(f"Tenant {tenant_id} deleted (chatbots cascaded)")
        return deleted
