"""
Obras ERP - Email Service
Envio de emails transacionais (confirmacao de cadastro)
"""
import smtplib
import ssl
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional
import logging

from .config import settings

logger = logging.getLogger(__name__)


class EmailService:
    """Envio de emails via SMTP"""

    def __init__(self):
        self.host = settings.SMTP_HOST
        self.port = settings.SMTP_PORT
        self.user = settings.SMTP_USER
        self.password = settings.SMTP_PASSWORD
        self.from_email = settings.SMTP_FROM_EMAIL
        self.from_name = settings.SMTP_FROM_NAME
        self.use_tls = settings.SMTP_TLS
        self.use_ssl = settings.SMTP_SSL

    def is_configured(self) -> bool:
        return bool(self.user and self.password)

    def send_email(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: Optional[str] = None
    ) -> bool:
        """
        Envia um email.

        Falha de envio nunca derruba a requisicao: retorna False e registra no log.
        """
        if not self.is_configured():
            logger.warning(f"SMTP nao configurado. Email '{subject}' para {to_email} nao enviado.")
            return False

        try:
            message = MIMEMultipart("alternative")
            message["Subject"] = subject
            message["From"] = f"{self.from_name} <{self.from_email}>"
            message["To"] = to_email

            if text_content:
                message.attach(MIMEText(text_content, "plain", "utf-8"))
            message.attach(MIMEText(html_content, "html", "utf-8"))

            if self.use_ssl:
                context = ssl.create_default_context()
                with smtplib.SMTP_SSL(self.host, self.port, context=context) as server:
                    server.login(self.user, self.password)
                    server.sendmail(self.from_email, to_email, message.as_string())
            else:
                with smtplib.SMTP(self.host, self.port) as server:
                    if self.use_tls:
                        server.starttls()
                    server.login(self.user, self.password)
                    server.sendmail(self.from_email, to_email, message.as_string())

            logger.info(f"Email enviado para {to_email}")
            return True

        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Falha ao enviar email para {to_email}: {e}")
            return False

    def send_verification_email(self, to_email: str, name: str, token: str) -> bool:
        """Link de confirmacao de email enviado no cadastro"""
        link = f"{settings.FRONTEND_URL}/verify-email?token={token}"
        hours = settings.EMAIL_VERIFICATION_EXPIRE_HOURS
        subject = f"Confirme seu email - {settings.APP_NAME}"

        html_content = f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
</head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
        <h2 style="color: #f97316;">Ola, {name}!</h2>

        <p>Sua empresa foi cadastrada no <strong>{settings.APP_NAME}</strong>.</p>
        <p>Para ativar o acesso, confirme seu email:</p>

        <p style="text-align: center;">
            <a href="{link}" style="display: inline-block; background: #f97316; color: white;
               padding: 12px 24px; text-decoration: none; border-radius: 6px; font-weight: bold;">
                CONFIRMAR EMAIL
            </a>
        </p>

        <p style="font-size: 12px; color: #6b7280;">O link expira em {hours} horas.</p>
    </div>
</body>
</html>
"""

        text_content = f"""
Ola, {name}!

Sua empresa foi cadastrada no {settings.APP_NAME}.
Confirme seu email acessando: {link}

O link expira em {hours} horas.
"""

        return self.send_email(to_email, subject, html_content, text_content)


email_service = EmailService()
