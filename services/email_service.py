"""
EmailService - thin wrapper over Flask-Mail used by the mailers
"""

import re
from typing import Optional, List, Tuple
from dataclasses import dataclass
from flask_mail import Mail, Message
from logging_config import get_logger

logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


def is_valid_email(email: Optional[str]) -> bool:
    """Loose format check for an email address"""
    return bool(email) and EMAIL_PATTERN.match(email.strip()) is not None


@dataclass
class EmailMessage:
    """Email message data structure"""
    subject: str
    recipients: List[str]
    body_text: str
    body_html: Optional[str] = None
    sender: Optional[str] = None
    cc: Optional[List[str]] = None
    reply_to: Optional[str] = None


class EmailService:
    """Service for handling email operations"""

    def __init__(self, mail_client: Optional[Mail] = None,
                 default_sender: Optional[str] = None,
                 server: Optional[str] = None):
        """
        Initialize Email Service

        Args:
            mail_client: Flask-Mail instance already bound to the app
            default_sender: Sender used when a message names none
            server: Configured MAIL_SERVER; sending is skipped without one
        """
        self.mail_client = mail_client
        self.default_sender = default_sender
        self.server = server

    def is_configured(self) -> bool:
        """True when a mail client and server are available"""
        return self.mail_client is not None and bool(self.server)

    def send_email(self, message: EmailMessage) -> Tuple[bool, str]:
        """
        Send an email message

        Returns:
            Tuple of (success: bool, message: str)
        """
        if not self.is_configured():
            logger.warning("Attempted to send email but service not configured",
                           subject=message.subject)
            return False, "Email service not configured"

        try:
            msg = Message(
                subject=message.subject,
                recipients=message.recipients,
                body=message.body_text,
                html=message.body_html,
                sender=message.sender or self.default_sender
            )
            if message.cc:
                msg.cc = message.cc
            if message.reply_to:
                msg.reply_to = message.reply_to

            self.mail_client.send(msg)

            logger.info("Email sent successfully",
                        subject=message.subject,
                        recipients=message.recipients)
            return True, "Email sent successfully"

        except Exception as e:
            logger.error("Failed to send email",
                         error=str(e),
                         subject=message.subject,
                         recipients=message.recipients)
            return False, f"Failed to send email: {str(e)}"
