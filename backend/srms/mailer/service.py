import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from srms.config.settings import settings

logger = logging.getLogger(__name__)

SMTP_HOSTS = {
    "gmail": ("smtp.gmail.com", 587),
    "ethereal": ("smtp.ethereal.email", 587),
}


def render_otp_email(otp: str) -> str:
    expiry = settings.OTP_EXPIRY_MINUTES
    return f"""
    <div style="font-family: Arial, sans-serif; max-width: 480px; margin: 0 auto;">
        <h2 style="color: #1f2937;">Password Reset Request</h2>
        <p>Use the following code to reset your School Result Management password:</p>
        <p style="font-size: 28px; font-weight: bold; letter-spacing: 6px; color: #2563eb;">{otp}</p>
        <p>This code expires in {expiry} minutes.</p>
        <p style="color: #6b7280; font-size: 12px;">If you did not request a password reset, you can ignore this email.</p>
    </div>
    """


def send_email(to_email: str, subject: str, body: str) -> bool:
    """
    Send an HTML email through the configured SMTP service.

    With EMAIL_SERVICE=console (or an unknown service) the message is logged
    instead. Returns False when delivery fails.
    """
    service = (settings.EMAIL_SERVICE or "console").lower()
    if service not in SMTP_HOSTS:
        logger.info(f"Email (console): To={to_email}, Subject={subject}")
        logger.debug(body)
        return True

    host, port = SMTP_HOSTS[service]
    try:
        msg = MIMEMultipart()
        msg['From'] = settings.EMAIL_FROM or settings.EMAIL_USER
        msg['To'] = to_email
        msg['Subject'] = subject
        msg.attach(MIMEText(body, 'html'))

        with smtplib.SMTP(host, port, timeout=30) as server:
            server.starttls()
            server.login(settings.EMAIL_USER, settings.EMAIL_PASS)
            server.send_message(msg)
        logger.info(f"Email sent to {to_email} via {service}")
        return True
    except Exception as e:
        logger.error(f"Failed to send email to {to_email}: {e}")
        return False


def send_otp_email(email: str, otp: str) -> bool:
    return send_email(email, "Password Reset OTP", render_otp_email(otp))
