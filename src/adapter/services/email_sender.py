import logging
import smtplib
from email.mime.text import MIMEText
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from src.app.services.email_sender import EmailDeliveryError, IEmailSender

logger = logging.getLogger(__name__)


class SmtpEmailSender(IEmailSender):
    """SMTP transport; raises EmailDeliveryError when unconfigured or failing"""

    def __init__(
        self,
        host: Optional[str],
        port: int,
        username: Optional[str],
        password: Optional[str],
        from_email: Optional[str] = None,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_email = from_email or username
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.host and self.username and self.password)

    def _send(self, to: str, subject: str, body: str) -> None:
        message = MIMEText(body, "plain", "utf-8")
        message["From"] = self.from_email
        message["To"] = to
        message["Subject"] = subject

        try:
            if self.port == 465:
                with smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout) as server:
                    server.login(self.username, self.password)
                    server.send_message(message)
            else:
                with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                    server.starttls()
                    server.login(self.username, self.password)
                    server.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            raise EmailDeliveryError(str(exc)) from exc

    async def send(self, to: str, subject: str, body: str) -> None:
        if not self.configured:
            raise EmailDeliveryError("SMTP is not configured")

        await run_in_threadpool(self._send, to, subject, body)
        logger.info(f"Email sent to {to}: {subject}")
