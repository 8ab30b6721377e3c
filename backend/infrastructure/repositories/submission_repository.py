"""Repositories pour les demandes commerciales et les abonnes dans PostgreSQL."""

import logging
from typing import Optional

from psycopg_pool import AsyncConnectionPool

from backend.domain.models.submission import Submission, SubmissionStatus, Subscriber
from backend.domain.ports.submission_repository_port import (
    SubmissionRepositoryPort,
    SubscriberRepositoryPort,
)

logger = logging.getLogger(__name__)

_SUBMISSION_COLUMNS = "submission_id, name, email, company, plan, message, status, created_at"


def _row_to_submission(row) -> Submission:
    return Submission(
        submission_id=row[0],
        name=row[1],
        email=row[2],
        company=row[3],
        plan=row[4],
        message=row[5],
        status=SubmissionStatus(row[6]),
        created_at=row[7],
    )


class PostgresSubmissionRepository(SubmissionRepositoryPort):
    def __init__(self, pool: AsyncConnectionPool):
        self._pool = pool

    async def create(self, submission: Submission) -> None:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    f"""
                    INSERT INTO submissions ({_SUBMISSION_COLUMNS})
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                    """,
                    (
                        submission.submission_id,
                        submission.name,
                        submission.email,
                        submission.company,
                        submission.plan,
                        submission.message,
                        submission.status.value,
                        submission.created_at,
                    ),
                )

        logger.info(f"Submission {submission.submission_id} ({submission.plan}) from {submission.email}")

    async def list_recent(self, limit: Optional[int] = None) -> list[Submission]:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    f"""
                    SELECT {_SUBMISSION_COLUMNS} FROM submissions
                    ORDER BY created_at DESC
                    LIMIT %s
                    """,
                    (limit,),
                )
                rows = await cur.fetchall()
                return [_row_to_submission(r) for r in rows]

    async def count(self) -> int:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute("SELECT COUNT(*) FROM submissions")
                row = await cur.fetchone()
                return row[0] if row else 0

    async def resolve_pending(
        self, submission_id: str, status: SubmissionStatus
    ) -> Optional[Submission]:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    f"""
                    UPDATE submissions SET status = %s
                    WHERE submission_id = %s AND status = 'pending'
                    RETURNING {_SUBMISSION_COLUMNS}
                    """,
                    (status.value, submission_id),
                )
                row = await cur.fetchone()

        return _row_to_submission(row) if row else None

    async def delete(self, submission_id: str) -> bool:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    "DELETE FROM submissions WHERE submission_id = %s",
                    (submission_id,),
                )
                return cur.rowcount > 0


class PostgresSubscriberRepository(SubscriberRepositoryPort):
    def __init__(self, pool: AsyncConnectionPool):
        self._pool = pool

    async def create(self, subscriber: Subscriber) -> bool:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    INSERT INTO subscribers (subscriber_id, email, subscribed_at)
                    VALUES (%s, %s, %s)
                    ON CONFLICT (email) DO NOTHING
                    """,
                    (subscriber.subscriber_id, subscriber.email, subscriber.subscribed_at),
                )
                return cur.rowcount > 0

    async def get_by_email(self, email: str) -> Optional[Subscriber]:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    "SELECT subscriber_id, email, subscribed_at FROM subscribers WHERE email = %s",
                    (email,),
                )
                row = await cur.fetchone()
                return Subscriber(row[0], row[1], row[2]) if row else None

    async def list_all(self) -> list[Subscriber]:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    "SELECT subscriber_id, email, subscribed_at FROM subscribers ORDER BY subscribed_at DESC"
                )
                rows = await cur.fetchall()
                return [Subscriber(r[0], r[1], r[2]) for r in rows]
