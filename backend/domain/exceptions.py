"""Exceptions domain pour l'admission des requetes et la gestion des comptes."""


class InvalidCredentialError(Exception):
    """Aucun chatbot ne correspond a l'API key fournie."""

    def __init__(self, message: str = "Invalid API key."):
        super().__init__(message)


class AccessDisabledError(Exception):
    """Le tenant proprietaire est banni."""

    def __init__(self, tenant_id: str, message: str = "This API key has been disabled."):
        self.tenant_id = tenant_id
        super().__init__(message)


class QuotaExceededError(Exception):
    """Le plafond de messages du cycle courant est atteint."""

    def __init__(self, tenant_id: str, limit: int):
        self.tenant_id = tenant_id
        self.limit = limit
        super().__init__("Monthly message limit reached. Please upgrade your plan.")


class InternalInconsistencyError(Exception):
    """Un chatbot reference un tenant inexistant."""

    def __init__(self, chatbot_id: str, tenant_id: str):
        self.chatbot_id = chatbot_id
        self.tenant_id = tenant_id
        super().__init__(f"Chatbot {chatbot_id} references missing tenant {tenant_id}")


class ChatbotLimitReachedError(Exception):
    """Le tenant possede deja le nombre maximal de chatbots de son plan."""

    def __init__(self, tenant_id: str, limit: int):
        self.tenant_id = tenant_id
        self.limit = limit
        super().__init__("You have reached your chatbot limit for this plan.")


class ChatbotNotFoundError(Exception):
    """Le chatbot n'existe pas ou n'appartient pas au tenant."""

    def __init__(self, chatbot_id: str):
        self.chatbot_id = chatbot_id
        super().__init__(
            "Chatbot not found or you do not have permission to access it."
        )


class TenantNotFoundError(Exception):
    def __init__(self, tenant_id: str):
        self.tenant_id = tenant_id
        super().__init__("User not found.")


class EmailAlreadyRegisteredError(Exception):
    def __init__(self, email: str):
        self.email = email
        super().__init__("A user with this email already exists.")


class InvalidLoginError(Exception):
    """Email ou mot de passe incorrect."""

    def __init__(self, message: str = "Invalid email or password."):
        super().__init__(message)


class GoogleAccountLoginError(Exception):
    """Compte cree via Google: la connexion par mot de passe est refusee."""

    def __init__(self):
        super().__init__(
            "This account was created with Google. Please use Google Sign-In."
        )


class InvalidOtpError(Exception):
    def __init__(self, message: str = "Invalid OTP."):
        super().__init__(message)


class OtpExpiredError(Exception):
    def __init__(self):
        super().__init__("OTP has expired.")


class InvalidGoogleTokenError(Exception):
    def __init__(self, message: str = "Google Sign-In failed."):
        super().__init__(message)


class SubmissionNotFoundError(Exception):
    """La demande n'existe pas ou a deja ete traitee."""

    def __init__(self, submission_id: str, message: str = "Submission not found."):
        self.submission_id = submission_id
        super().__init__(message)


class AlreadySubscribedError(Exception):
    def __init__(self, email: str):
        self.email = email
        super().__init__("This email is already subscribed.")


class NoRecipientsError(Exception):
    """Envoi groupe sans aucun destinataire."""

    def __init__(self, message: str):
        super().__init__(message)


class MailDeliveryError(Exception):
    """Le fournisseur SMTP a refuse ou n'a pas pu envoyer l'email."""

    def __init__(self, message: str = "Could not send the email."):
        super().__init__(message)


class EmptyMessageError(Exception):
    def __init__(self, message: str = "Message is required."):
        super().__init__(message)
