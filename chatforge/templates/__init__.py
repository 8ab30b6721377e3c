from .embed import EmbedScripts, generate_embed_scripts
from .emails import (
    RenderedEmail,
    render_direct_message_email,
    render_otp_email,
    render_submission_status_email,
)

__all__ = [
    "EmbedScripts",
    "generate_embed_scripts",
    "RenderedEmail",
    "render_direct_message_email",
    "render_otp_email",
    "render_submission_status_email",
]
