"""Email notifications for new contacts and reviews.

Sends a fixed Spanish HTML template to the site's contact address over SMTP.
Delivery is best-effort: the write that triggered it has already been
committed, so failures are logged and swallowed here.
"""

import html
import logging
from collections.abc import Mapping
from datetime import datetime
from email.message import EmailMessage
from enum import Enum
from typing import Any

import aiosmtplib

from asiste_api.config import Settings

logger = logging.getLogger(__name__)

SITE_NAME = "Asiste Health Care"
SITE_DOMAIN = "asistehealth.com"


class NotificationKind(str, Enum):
    CONTACT = "contact"
    REVIEW = "review"


def _format_date(moment: datetime) -> str:
    """es-ES style ``dd/mm/yyyy, hh:mm:ss``."""
    return moment.strftime("%d/%m/%Y, %H:%M:%S")


def _contact_body(data: Mapping[str, Any], sent_at: str) -> str:
    esc = {k: html.escape(str(v)) for k, v in data.items()}
    return f"""
<h2>Nuevo contacto recibido</h2>
<p><strong>Nombre:</strong> {esc.get("name", "")}</p>
<p><strong>Teléfono:</strong> {esc.get("phone", "")}</p>
<p><strong>Email:</strong> {esc.get("email", "")}</p>
<p><strong>Código Postal:</strong> {esc.get("postalCode", "")}</p>
<p><strong>Fecha:</strong> {sent_at}</p>
<hr>
<p><em>Este mensaje fue enviado desde el formulario de contacto de {SITE_DOMAIN}</em></p>
"""


def _review_body(data: Mapping[str, Any], sent_at: str) -> str:
    esc = {k: html.escape(str(v)) for k, v in data.items()}
    return f"""
<h2>Nueva reseña recibida</h2>
<p><strong>Nombre:</strong> {esc.get("name", "")}</p>
<p><strong>Email:</strong> {esc.get("email", "")}</p>
<p><strong>Calificación:</strong> {esc.get("rating", "")}/5 ⭐</p>
<p><strong>Comentario:</strong></p>
<blockquote style="border-left: 4px solid #ccc; padding-left: 16px; margin: 16px 0; font-style: italic;">
  {esc.get("comment", "")}
</blockquote>
<p><strong>Fecha:</strong> {sent_at}</p>
<hr>
<p><em>Esta reseña está pendiente de aprobación. Puedes aprobarla desde el panel de administración.</em></p>
"""


_TEMPLATES = {
    NotificationKind.CONTACT: (
        f"Nuevo contacto desde la web - {SITE_NAME}",
        _contact_body,
    ),
    NotificationKind.REVIEW: (
        f"Nueva reseña pendiente de aprobación - {SITE_NAME}",
        _review_body,
    ),
}


class Notifier:
    """Composes and sends admin notification emails."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    @property
    def configured(self) -> bool:
        """Sender and recipient are both set."""
        return bool(self._settings.smtp_user and self._settings.contact_email)

    def compose(
        self,
        kind: NotificationKind,
        data: Mapping[str, Any],
        now: datetime | None = None,
    ) -> EmailMessage:
        subject, render = _TEMPLATES[NotificationKind(kind)]
        message = EmailMessage()
        message["From"] = self._settings.smtp_user
        message["To"] = self._settings.contact_email
        message["Subject"] = subject
        sent_at = _format_date(now or datetime.now())
        message.set_content(render(data, sent_at), subtype="html")
        return message

    async def notify(self, kind: NotificationKind, data: Mapping[str, Any]) -> bool:
        """Attempt delivery. Returns True when sent; delivery errors never raise."""
        kind = NotificationKind(kind)
        if not self.configured:
            logger.debug("SMTP not configured, skipping %s notification", kind.value)
            return False

        try:
            message = self.compose(kind, data)
            await aiosmtplib.send(
                message,
                hostname=self._settings.smtp_host or "localhost",
                port=self._settings.smtp_port,
                username=self._settings.smtp_user or None,
                password=self._settings.smtp_pass or None,
                use_tls=self._settings.smtp_secure,
            )
        except Exception:
            logger.exception("Error sending %s notification email", kind.value)
            return False

        logger.info(
            "Sent %s notification to %s", kind.value, self._settings.contact_email
        )
        return True
