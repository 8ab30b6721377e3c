"""Routes d'authentification des tenants (email + OTP, Google)."""

from fastapi import APIRouter, Depends, HTTPException, status
from dependency_injector.wiring import inject, Provide

from backend.application.use_cases.google_sign_in import GoogleSignInUseCase
from backend.application.use_cases.login import LoginUseCase
from backend.application.use_cases.signup import SignupUseCase
from backend.application.use_cases.verify_otp import ResendOtpUseCase, VerifyOtpUseCase
from backend.domain.exceptions import (
    EmailAlreadyRegisteredError,
    GoogleAccountLoginError,
    InvalidGoogleTokenError,
    InvalidLoginError,
    InvalidOtpError,
    MailDeliveryError,
    OtpExpiredError,
    TenantNotFoundError,
)
from backend.domain.models.tenant import (
    GoogleCallbackRequest,
    LoginRequest,
    LoginResponse,
    ResendOtpRequest,
    SessionResponse,
    SignupRequest,
    SignupResponse,
    TenantResponse,
    VerifyOtpRequest,
    VerifyOtpResponse,
)
from backend.infrastructure.container import Container
from backend.routes.dependencies import CurrentTenant

router = APIRouter()


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
@inject
async def signup(
    payload: SignupRequest,
    use_case: SignupUseCase = Depends(Provide[Container.signup]),
) -> SignupResponse:
    """
    Cree un compte (plan Free) et son premier chatbot.

    Un code de verification est envoye par email; le compte reste
    non verifie jusqu'a /verify-otp.
    """
    try:
        tenant = await use_case.execute(payload.email, payload.password)
    except EmailAlreadyRegisteredError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return SignupResponse(user_id=tenant.tenant_id)


@router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
@inject
async def login(
    payload: LoginRequest,
    use_case: LoginUseCase = Depends(Provide[Container.login]),
) -> LoginResponse:
    """
    Connexion par email et mot de passe.

    Compte non verifie: {"success": false, "requiresOtp": true, "userId": ...}
    et un nouveau code est envoye.
    """
    try:
        result = await use_case.execute(payload.email, payload.password)
    except GoogleAccountLoginError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except InvalidLoginError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

    if result.requires_otp:
        return LoginResponse(success=False, requires_otp=True, user_id=result.tenant.tenant_id)
    return LoginResponse(success=True, token=result.token)


@router.post("/verify-otp", response_model=VerifyOtpResponse)
@inject
async def verify_otp(
    payload: VerifyOtpRequest,
    use_case: VerifyOtpUseCase = Depends(Provide[Container.verify_otp]),
) -> VerifyOtpResponse:
    try:
        tenant, token = await use_case.execute(payload.user_id, payload.otp)
    except (InvalidOtpError, OtpExpiredError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return VerifyOtpResponse(token=token, email=tenant.email)


@router.post("/resend-otp")
@inject
async def resend_otp(
    payload: ResendOtpRequest,
    use_case: ResendOtpUseCase = Depends(Provide[Container.resend_otp]),
) -> dict:
    try:
        await use_case.execute(payload.user_id)
    except TenantNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except MailDeliveryError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Could not send verification email.",
        )
    return {"success": True}


@router.post("/google/callback", response_model=SessionResponse)
@inject
async def google_callback(
    payload: GoogleCallbackRequest,
    use_case: GoogleSignInUseCase = Depends(Provide[Container.google_sign_in]),
) -> SessionResponse:
    """Echange un ID token Google contre un token de session."""
    try:
        _, token = await use_case.execute(payload.token)
    except InvalidGoogleTokenError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    return SessionResponse(token=token)


@router.get("/me", response_model=TenantResponse)
async def read_me(tenant: CurrentTenant) -> TenantResponse:
    """Retourne le profil du tenant connecte (sans secrets)."""
    return TenantResponse.from_tenant(tenant)
