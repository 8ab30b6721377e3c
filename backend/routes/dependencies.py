"""Dependencies FastAPI pour l'authentification (tenants et administrateur)."""

from typing import Annotated, Optional

from fastapi import Cookie, Depends, HTTPException, status
from dependency_injector.wiring import inject, Provide

from backend.domain.models.tenant import Tenant
from backend.domain.ports.tenant_repository_port import TenantRepositoryPort
from backend.infrastructure.container import Container
from backend.infrastructure.security import (
    ADMIN_COOKIE_NAME,
    decode_token,
    is_admin_session_valid,
    oauth2_scheme,
)


@inject
async def get_current_tenant(
    token: Annotated[str, Depends(oauth2_scheme)],
    tenant_repo: TenantRepositoryPort = Depends(Provide[Container.tenant_repository]),
) -> Tenant:
    """
    Dependency FastAPI: extrait le tenant courant du token JWT (sub = tenant_id).

    Usage dans les routes:
        @router.get("/protected")
        async def protected_route(tenant: CurrentTenant):
            ...
    """
    token_data = decode_token(token)

    tenant = await tenant_repo.get_by_id(token_data.tenant_id)
    if tenant is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return tenant


async def get_current_active_tenant(
    tenant: Annotated[Tenant, Depends(get_current_tenant)],
) -> Tenant:
    """Leve une exception si le compte est banni."""
    if tenant.is_banned:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="This account has been disabled."
        )
    return tenant


async def require_admin(
    admin_session: Annotated[Optional[str], Cookie(alias=ADMIN_COOKIE_NAME)] = None,
) -> None:
    """Dependency FastAPI: exige un cookie de session administrateur valide."""
    if not is_admin_session_valid(admin_session):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Admin session required."
        )


# Type alias pour simplifier l'utilisation dans les routes
CurrentTenant = Annotated[Tenant, Depends(get_current_active_tenant)]
AdminSession = Depends(require_admin)
