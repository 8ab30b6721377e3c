"""
Container DI declaratif de l'API avec dependency-injector.

- Providers declaratifs (Singleton, Factory, Selector)
- Override pour tests sans modifier le code
- Wiring automatique des routes avec @inject

Documentation: https://python-dependency-injector.ets-labs.org/
"""

from dependency_injector import containers, providers

from chatforge.agents import ChatResponder, EmailWriter
from chatforge.config import settings
from chatforge.infrastructure.adapters import create_chat_model
from backend.application.use_cases.administer_users import UserAdministrationUseCase
from backend.application.use_cases.chat_admission import ChatAdmissionUseCase
from backend.application.use_cases.chat_config import GetChatConfigUseCase
from backend.application.use_cases.chat_reply import ChatReplyUseCase
from backend.application.use_cases.dashboard_stats import DashboardStatsUseCase
from backend.application.use_cases.demo_chat import DemoChatUseCase
from backend.application.use_cases.direct_mail import DirectMailUseCase
from backend.application.use_cases.google_sign_in import GoogleSignInUseCase
from backend.application.use_cases.login import LoginUseCase
from backend.application.use_cases.manage_chatbots import ChatbotManagementUseCase
from backend.application.use_cases.newsletter import NewsletterUseCase
from backend.application.use_cases.otp import OtpIssuer
from backend.application.use_cases.signup import SignupUseCase
from backend.application.use_cases.submissions import SubmissionsUseCase
from backend.application.use_cases.verify_otp import ResendOtpUseCase, VerifyOtpUseCase
from backend.infrastructure.adapters.google_identity import GoogleIdentityVerifier
from backend.infrastructure.adapters.smtp_mailer import SmtpMailer
from backend.infrastructure.database import create_pool
from backend.infrastructure.repositories.chatbot_repository import PostgresChatbotRepository
from backend.infrastructure.repositories.submission_repository import (
    PostgresSubmissionRepository,
    PostgresSubscriberRepository,
)
from backend.infrastructure.repositories.tenant_repository import PostgresTenantRepository


class Container(containers.DeclarativeContainer):
    """
    Container DI de l'API.

    Usage Production:
        container = Container()
        container.config.llm_provider.from_value(settings.LLM_PROVIDER)

    Usage Tests (override sans modifier le code):
        container.tenant_repository.override(providers.Object(InMemoryTenantRepository()))

    Graphe de dependances (chat):
        chat_reply
            ├── chat_admission
            │       ├── chatbot_repository ── db_pool
            │       └── tenant_repository ─── db_pool
            └── chat_responder
                    └── chat_model (Selector sur config.llm_provider)
    """

    wiring_config = containers.WiringConfiguration(
        modules=[
            "backend.routes.admin",
            "backend.routes.auth",
            "backend.routes.chat",
            "backend.routes.chatbots",
            "backend.routes.dependencies",
            "backend.routes.marketing",
        ]
    )

    # =========================================================================
    # CONFIGURATION
    # =========================================================================

    config = providers.Configuration()

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    db_pool = providers.Singleton(create_pool)
    """Pool psycopg partage (ferme a la creation, ouvert par le lifespan)."""

    tenant_repository = providers.Singleton(PostgresTenantRepository, pool=db_pool)
    chatbot_repository = providers.Singleton(PostgresChatbotRepository, pool=db_pool)
    submission_repository = providers.Singleton(PostgresSubmissionRepository, pool=db_pool)
    subscriber_repository = providers.Singleton(PostgresSubscriberRepository, pool=db_pool)

    # =========================================================================
    # ADAPTERS EXTERNES
    # =========================================================================

    chat_model = providers.Selector(
        config.llm_provider,
        ollama=providers.Singleton(create_chat_model, provider="ollama"),
        mistral=providers.Singleton(create_chat_model, provider="mistral"),
    )

    mailer = providers.Singleton(
        SmtpMailer,
        host=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        username=settings.SMTP_USER,
        password=settings.SMTP_PASSWORD,
        from_address=settings.MAIL_FROM_ADDRESS,
        use_tls=settings.SMTP_USE_TLS,
    )

    google_verifier = providers.Singleton(
        GoogleIdentityVerifier,
        client_id=settings.GOOGLE_CLIENT_ID,
        tokeninfo_url=settings.GOOGLE_TOKENINFO_URL,
    )

    # =========================================================================
    # SERVICES
    # =========================================================================

    chat_responder = providers.Singleton(ChatResponder, model=chat_model)
    email_writer = providers.Singleton(EmailWriter, model=chat_model)
    otp_issuer = providers.Factory(OtpIssuer, tenant_repo=tenant_repository, mailer=mailer)

    # =========================================================================
    # USE CASES
    # =========================================================================

    chat_admission = providers.Factory(
        ChatAdmissionUseCase,
        chatbot_repo=chatbot_repository,
        tenant_repo=tenant_repository,
        platform_origin=settings.APP_URL,
        cycle_length_days=settings.CYCLE_LENGTH_DAYS,
    )
    chat_reply = providers.Factory(
        ChatReplyUseCase,
        admission=chat_admission,
        responder=chat_responder,
    )
    chat_config = providers.Factory(
        GetChatConfigUseCase,
        chatbot_repo=chatbot_repository,
        tenant_repo=tenant_repository,
    )
    demo_chat = providers.Factory(DemoChatUseCase, responder=chat_responder)

    signup = providers.Factory(
        SignupUseCase,
        tenant_repo=tenant_repository,
        chatbot_repo=chatbot_repository,
        otp_issuer=otp_issuer,
    )
    login = providers.Factory(LoginUseCase, tenant_repo=tenant_repository, otp_issuer=otp_issuer)
    verify_otp = providers.Factory(VerifyOtpUseCase, tenant_repo=tenant_repository)
    resend_otp = providers.Factory(
        ResendOtpUseCase, tenant_repo=tenant_repository, otp_issuer=otp_issuer
    )
    google_sign_in = providers.Factory(
        GoogleSignInUseCase,
        identity_provider=google_verifier,
        tenant_repo=tenant_repository,
        chatbot_repo=chatbot_repository,
    )

    chatbot_management = providers.Factory(
        ChatbotManagementUseCase,
        chatbot_repo=chatbot_repository,
        tenant_repo=tenant_repository,
        app_url=settings.APP_URL,
        cycle_length_days=settings.CYCLE_LENGTH_DAYS,
    )

    user_administration = providers.Factory(
        UserAdministrationUseCase,
        tenant_repo=tenant_repository,
        chatbot_repo=chatbot_repository,
    )
    submissions = providers.Factory(
        SubmissionsUseCase,
        submission_repo=submission_repository,
        mailer=mailer,
    )
    newsletter = providers.Factory(
        NewsletterUseCase,
        subscriber_repo=subscriber_repository,
        email_writer=email_writer,
        mailer=mailer,
    )
    direct_mail = providers.Factory(
        DirectMailUseCase,
        tenant_repo=tenant_repository,
        email_writer=email_writer,
        mailer=mailer,
    )
    dashboard_stats = providers.Factory(
        DashboardStatsUseCase,
        tenant_repo=tenant_repository,
        submission_repo=submission_repository,
    )
