"""Use cases: verification et renvoi de l'OTP."""

import hmac
import logging

from backend.application.use_cases.otp import OtpIssuer
from backend.domain.exceptions import InvalidOtpError, OtpExpiredError, TenantNotFoundError
from backend.domain.models.tenant import Tenant, utcnow
from backend.domain.ports.tenant_repository_port import TenantRepositoryPort
from backend.infrastructure.security import create_session_token

logger = logging.getLogger(__name__)


class VerifyOtpUseCase:
    def __init__(self, tenant_repo: TenantRepositoryPort):
        self._tenant_repo = tenant_repo

    async def execute(self, tenant_id: str, otp: str) -> tuple[Tenant, str]:
        """
        Returns:
            (tenant verifie, token de session)
        """
        tenant = await self._tenant_repo.get_by_id(tenant_id)
        if tenant is None:
            raise InvalidOtpError("Invalid user ID.")

        submitted = otp.strip().upper()
        if not tenant.otp or not hmac.compare_digest(tenant.otp, submitted):
            raise InvalidOtpError()

        if tenant.otp_expires is None or tenant.otp_expires < utcnow():
            raise OtpExpiredError()

        await self._tenant_repo.mark_verified(tenant.tenant_id)
        tenant.is_verified = True
        tenant.otp = None
        tenant.otp_expires = None

        logger.info(f"Tenant {tenant.tenant_id} verified")
        return tenant, create_session_token(tenant)


class ResendOtpUseCase:
    def __init__(self, tenant_repo: TenantRepositoryPort, otp_issuer: OtpIssuer):
        self._tenant_repo = tenant_repo
        self._otp_issuer = otp_issuer

    async def execute(self, tenant_id: str) -> None:
        tenant = await self._tenant_repo.get_by_id(tenant_id)
        if tenant is None:
            raise TenantNotFoundError(tenant_id)
        await self._otp_issuer.issue(tenant, raise_on_mail_error=True)
