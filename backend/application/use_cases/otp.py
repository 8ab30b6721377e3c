"""Emission et envoi des codes OTP de verification d'email."""

import logging
from datetime import timedelta

from backend.domain.exceptions import MailDeliveryError
from backend.domain.models.tenant import Tenant, utcnow
from backend.domain.ports.mailer_port import MailerPort
from backend.domain.ports.tenant_repository_port import TenantRepositoryPort
from backend.infrastructure.security import generate_otp
from chatforge.config import settings
from chatforge.templates import render_otp_email

logger = logging.getLogger(__name__)


class OtpIssuer:
    """Genere un nouvel OTP, le persiste (remplace le precedent) et l'envoie par email."""

    def __init__(self, tenant_repo: TenantRepositoryPort, mailer: MailerPort):
        self._tenant_repo = tenant_repo
        self._mailer = mailer

    async def issue(self, tenant: Tenant, raise_on_mail_error: bool = False) -> None:
        otp = generate_otp()
        expires = utcnow() + timedelta(minutes=settings.OTP_TTL_MINUTES)
        await self._tenant_repo.set_otp(tenant.tenant_id, otp, expires)

        email = render_otp_email(otp, settings.OTP_TTL_MINUTES, app_name=settings.APP_NAME)
        try:
            await self._mailer.send([tenant.email], email.subject, email.html, settings.MAIL_FROM_NAME)
        except MailDeliveryError:
            logger.error(f"Could not send verification email to tenant {tenant.tenant_id}")
            if raise_on_mail_error:
                raise
            return
        logger.info(f"Verification code sent to tenant {tenant.tenant_id}")
