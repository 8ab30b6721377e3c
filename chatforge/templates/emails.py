"""
Templates des emails transactionnels (OTP, suivi des demandes, messages admin).

Les valeurs saisies par les utilisateurs sont echappees par Jinja2.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from jinja2 import Environment

_env = Environment(autoescape=True)

_OTP_HTML = _env.from_string("""
<div style="font-family: sans-serif; max-width: 600px; margin: auto; padding: 20px; border: 1px solid #ddd; border-radius: 10px;">
  <h2 style="text-align: center; color: #333;">{{ app_name }} Verification</h2>
  <p style="font-size: 16px;">Hello,</p>
  <p style="font-size: 16px;">Thank you for signing up. Please use the following One-Time Password (OTP) to complete your registration:</p>
  <p style="text-align: center; font-size: 24px; font-weight: bold; letter-spacing: 5px; margin: 20px 0; padding: 10px; background-color: #f4f4f4; border-radius: 5px;">{{ otp }}</p>
  <p style="font-size: 16px;">This code will expire in {{ ttl_minutes }} minutes.</p>
  <p style="font-size: 14px; color: #777;">If you did not request this, please ignore this email.</p>
  <hr style="border: none; border-top: 1px solid #ddd; margin: 20px 0;" />
  <p style="font-size: 12px; color: #aaa; text-align: center;">&copy; {{ year }} {{ app_name }}. All rights reserved.</p>
</div>
""")

_ACCEPTED_HTML = _env.from_string("""
<div style="font-family: sans-serif; max-width: 600px; margin: auto; padding: 20px; border: 1px solid #ddd; border-radius: 10px; background-color: #f9fdf9;">
  <div style="text-align: center; padding-bottom: 20px; border-bottom: 1px solid #ddd;">
    <h2 style="color: #28a745;">Congratulations, {{ name }}!</h2>
    <p style="font-size: 18px; color: #333;">Your inquiry for the <strong>{{ plan }} Plan</strong> has been accepted.</p>
  </div>
  <div style="padding: 20px 0;">
    <p style="font-size: 16px; color: #555;">A member of our team will be reaching out to you within the next 24 hours to discuss the next steps, including payment and onboarding.</p>
    <p style="font-size: 16px; color: #555;">We're excited to have you on board!</p>
  </div>
  <div style="font-size: 14px; color: #777; text-align: center; padding-top: 20px; border-top: 1px solid #ddd;">
    <p>If you have any immediate questions, feel free to reply to this email.</p>
    <p>&mdash; The {{ app_name }} Team</p>
  </div>
</div>
""")

_REJECTED_HTML = _env.from_string("""
<div style="font-family: sans-serif; max-width: 600px; margin: auto; padding: 20px; border: 1px solid #ddd; border-radius: 10px; background-color: #fdf9f9;">
  <div style="text-align: center; padding-bottom: 20px; border-bottom: 1px solid #ddd;">
    <h2 style="color: #dc3545;">Update on Your {{ app_name }} Inquiry</h2>
    <p style="font-size: 18px; color: #333;">Hello {{ name }},</p>
  </div>
  <div style="padding: 20px 0;">
    <p style="font-size: 16px; color: #555;">Thank you for your interest in the <strong>{{ plan }} Plan</strong>.</p>
    <p style="font-size: 16px; color: #555;">After careful review, we are unable to move forward with your inquiry at this time.</p>
    <p style="font-size: 16px; color: #555;">We encourage you to explore our other plans and features.</p>
  </div>
  <div style="font-size: 14px; color: #777; text-align: center; padding-top: 20px; border-top: 1px solid #ddd;">
    <p>Thank you again for your interest in {{ app_name }}.</p>
    <p>&mdash; The {{ app_name }} Team</p>
  </div>
</div>
""")

_DIRECT_MESSAGE_HTML = _env.from_string("""
<div style="font-family: sans-serif; max-width: 600px; margin: auto; padding: 20px; border: 1px solid #ddd; border-radius: 10px;">
  <h2 style="color: #333;">A Message from {{ app_name }}</h2>
  <p style="font-size: 16px;">Hello,</p>
  <p style="font-size: 16px;">You have received the following message from an administrator:</p>
  <div style="background-color: #f4f4f4; border-left: 4px solid #007bff; padding: 15px; margin: 20px 0;">
    <p style="margin: 0; white-space: pre-wrap;">{{ message }}</p>
  </div>
  <p style="font-size: 14px; color: #777;">If you have questions, you can reply directly to this email.</p>
</div>
""")


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    html: str


def render_otp_email(otp: str, ttl_minutes: int, app_name: str = "ChatForge AI") -> RenderedEmail:
    return RenderedEmail(
        subject=f"Your {app_name} Verification Code",
        html=_OTP_HTML.render(
            otp=otp,
            ttl_minutes=ttl_minutes,
            app_name=app_name,
            year=datetime.now(timezone.utc).year,
        ),
    )


def render_submission_status_email(
    name: str, plan: str, accepted: bool, app_name: str = "ChatForge AI"
) -> RenderedEmail:
    """Email envoye quand une demande Pro / Enterprise est acceptee ou refusee."""
    if accepted:
        return RenderedEmail(
            subject=f"Your Inquiry for the {plan} Plan has been Accepted!",
            html=_ACCEPTED_HTML.render(name=name, plan=plan, app_name=app_name),
        )
    return RenderedEmail(
        subject=f"Update on your {app_name} {plan} Plan Inquiry",
        html=_REJECTED_HTML.render(name=name, plan=plan, app_name=app_name),
    )


def render_direct_message_email(message: str, app_name: str = "ChatForge AI") -> str:
    return _DIRECT_MESSAGE_HTML.render(message=message, app_name=app_name)
