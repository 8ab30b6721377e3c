"""Use case: statistiques du tableau de bord administrateur."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from backend.domain.models.admin import (
    DashboardStatsResponse,
    DashboardTotals,
    SignupChartPoint,
)
from backend.domain.models.submission import SubmissionResponse
from backend.domain.models.tenant import utcnow
from backend.domain.ports.submission_repository_port import SubmissionRepositoryPort
from backend.domain.ports.tenant_repository_port import TenantRepositoryPort

CHART_DAYS = 7
RECENT_SUBMISSIONS = 5


class DashboardStatsUseCase:
    def __init__(
        self,
        tenant_repo: TenantRepositoryPort,
        submission_repo: SubmissionRepositoryPort,
    ):
        self._tenant_repo = tenant_repo
        self._submission_repo = submission_repo

    async def execute(self, now: Optional[datetime] = None) -> DashboardStatsResponse:
        now = now or utcnow()
        week_ago = now - timedelta(days=CHART_DAYS)
        first_day = (now - timedelta(days=CHART_DAYS - 1)).date()

        total_users = await self._tenant_repo.count()
        new_users = await self._tenant_repo.count_created_since(week_ago)
        total_submissions = await self._submission_repo.count()
        recent = await self._submission_repo.list_recent(limit=RECENT_SUBMISSIONS)
        signups = await self._tenant_repo.list_created_since(week_ago)

        # Inscriptions par jour (UTC), jours sans inscription a zero
        per_day = {first_day + timedelta(days=i): 0 for i in range(CHART_DAYS)}
        for tenant in signups:
            if tenant.created_at is None:
                continue
            day = tenant.created_at.astimezone(timezone.utc).date()
            if day in per_day:
                per_day[day] += 1

        return DashboardStatsResponse(
            stats=DashboardTotals(
                total_users=total_users,
                new_users=new_users,
                total_submissions=total_submissions,
            ),
            recent_submissions=[SubmissionResponse.from_submission(s) for s in recent],
            signup_chart_data=[
                SignupChartPoint(date=day.isoformat(), signups=count)
                for day, count in per_day.items()
            ],
        )
