"""
Obras ERP - Error Notification
Envia email ao suporte quando uma requisicao termina em erro 500
"""
import logging
import threading
from datetime import datetime
from typing import Optional

from app.core.config import settings
from app.core.email import email_service

logger = logging.getLogger(__name__)

# Mesmo erro em sequencia gera um unico email
_error_cache = {}
_CACHE_TTL_SECONDS = 300


def _get_error_key(error_type: str, error_msg: str) -> str:
    return f"{error_type}:{error_msg[:100]}"


def _should_send_notification(error_key: str) -> bool:
    """Verifica se deve enviar notificacao (evita spam)"""
    now = datetime.utcnow()

    if error_key in _error_cache:
        last_sent = _error_cache[error_key]
        if (now - last_sent).total_seconds() < _CACHE_TTL_SECONDS:
            return False

    _error_cache[error_key] = now
    return True


def send_error_notification(
    error_type: str,
    error_message: str,
    error_details: Optional[str] = None,
    company_id: Optional[str] = None,
    user_email: Optional[str] = None,
    endpoint: Optional[str] = None
) -> bool:
    """
    Envia email de notificacao de erro.

    Args:
        error_type: Tipo do erro (ex: "API_ERROR", "SCHEDULER_ERROR")
        error_message: Mensagem resumida do erro
        error_details: Stack trace
        company_id: Empresa afetada (se houver usuario autenticado)
        user_email: Usuario da requisicao
        endpoint: Metodo + caminho que gerou o erro
    """
    if not settings.ERROR_NOTIFICATION_ENABLED:
        return False

    error_key = _get_error_key(error_type, error_message)
    if not _should_send_notification(error_key):
        logger.debug(f"Notificacao de erro suprimida (spam protection): {error_key}")
        return False

    timestamp = datetime.utcnow().strftime("%Y-%m-%d %H:%M:%S UTC")
    fields = [
        ("Tipo do Erro", error_type),
        ("Mensagem", error_message),
        ("Data/Hora", timestamp),
        ("Empresa", company_id),
        ("Usuario", user_email),
        ("Endpoint", endpoint),
    ]

    rows = "".join(
        f"<p><strong>{label}:</strong> {value}</p>" for label, value in fields if value
    )
    details = f"<pre style='background:#fef2f2;color:#991b1b'>{error_details[:2000]}</pre>" if error_details else ""

    html_body = f"""
<!DOCTYPE html>
<html>
<body style="font-family: Arial, sans-serif;">
    <h2 style="color: #dc2626;">&#9888; Erro no {settings.APP_NAME}</h2>
    {rows}
    {details}
</body>
</html>
"""

    text_body = "\n".join(f"{label}: {value}" for label, value in fields if value)
    if error_details:
        text_body += f"\n\n{error_details[:2000]}"

    subject = f"[OBRAS ERP ERRO] {error_type}: {error_message[:50]}"
    sent = email_service.send_email(settings.ERROR_NOTIFICATION_EMAIL, subject, html_body, text_body)
    if sent:
        logger.info(f"Notificacao de erro enviada: {error_type}")
    return sent


def notify_error_sync(
    error_type: str,
    error_message: str,
    error_details: Optional[str] = None,
    **kwargs
):
    """
    Dispara a notificacao em thread separada para nao bloquear a resposta.
    """
    if not settings.ERROR_NOTIFICATION_ENABLED:
        return

    def _send():
        send_error_notification(
            error_type=error_type,
            error_message=error_message,
            error_details=error_details,
            **kwargs
        )

    thread = threading.Thread(target=_send, daemon=True)
    thread.start()
