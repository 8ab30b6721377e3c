"""Use case: connexion par email et mot de passe."""

import logging
from dataclasses import dataclass
from typing import Optional

from backend.application.use_cases.otp import OtpIssuer
from backend.domain.exceptions import GoogleAccountLoginError, InvalidLoginError
from backend.domain.models.tenant import AuthMethod, Tenant
from backend.domain.ports.tenant_repository_port import TenantRepositoryPort
from backend.infrastructure.security import create_session_token, verify_password

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    """token est None quand le compte doit encore etre verifie par OTP."""

    tenant: Tenant
    token: Optional[str] = None

    @property
    def requires_otp(self) -> bool:
        return self.token is None


class LoginUseCase:
    def __init__(self, tenant_repo: TenantRepositoryPort, otp_issuer: OtpIssuer):
        self._tenant_repo = tenant_repo
        self._otp_issuer = otp_issuer

    async def execute(self, email: str, password: str) -> LoginResult:
        tenant = await self._tenant_repo.get_by_email(email.strip().lower())
        if tenant is None:
            raise InvalidLoginError()

        if tenant.auth_method is AuthMethod.GOOGLE:
            raise GoogleAccountLoginError()

        if not tenant.password_hash:
            raise InvalidLoginError("Invalid account configuration. Please contact support.")

        if not verify_password(password, tenant.password_hash):
            raise InvalidLoginError()

        if not tenant.is_verified:
            await self._otp_issuer.issue(tenant)
            return LoginResult(tenant=tenant)

        logger.info(f"Tenant {tenant.tenant_id} logged in")
        return LoginResult(tenant=tenant, token=create_session_token(tenant))
