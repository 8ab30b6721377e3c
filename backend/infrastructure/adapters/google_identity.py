"""Verification des ID tokens Google via l'endpoint tokeninfo."""

import logging

import httpx

from backend.domain.exceptions import InvalidGoogleTokenError
from backend.domain.ports.identity_provider_port import IdentityProfile, IdentityProviderPort

logger = logging.getLogger(__name__)


class GoogleIdentityVerifier(IdentityProviderPort):
    """
    Valide un ID token Google (signature et expiration verifiees par Google)
    puis controle l'audience et l'email.
    """

    def __init__(self, client_id: str, tokeninfo_url: str, timeout: float = 10.0):
        self._client_id = client_id
        self._tokeninfo_url = tokeninfo_url
        self._timeout = timeout

    async def verify(self, credential: str) -> IdentityProfile:
        if not self._client_id:
            raise InvalidGoogleTokenError("Google Sign-In is not configured.")

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(self._tokeninfo_url, params={"id_token": credential})
        except httpx.HTTPError as e:
            logger.error(f"Google tokeninfo unreachable: {e}")
            raise InvalidGoogleTokenError() from e

        if response.status_code != 200:
            logger.warning(f"Google token rejected (status {response.status_code})")
            raise InvalidGoogleTokenError()

        payload = response.json()
        if payload.get("aud") != self._client_id:
            logger.warning("Google token issued for another client")
            raise InvalidGoogleTokenError()

        email = payload.get("email")
        if not email or str(payload.get("email_verified", "")).lower() != "true":
            raise InvalidGoogleTokenError("Google account email is not verified.")

        return IdentityProfile(
            email=email.lower(),
            name=payload.get("name"),
            avatar=payload.get("picture"),
        )
