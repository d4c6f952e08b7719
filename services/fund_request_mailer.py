"""
FundRequestMailer - builds and sends the fund request notice
"""

from typing import Optional, Tuple
from flask import render_template
from services.email_service import EmailService, EmailMessage
from casa_database import FundRequest, CasaCase
from logging_config import get_logger

logger = get_logger(__name__)


class FundRequestMailer:
    """Sends a notice for each submitted fund request"""

    def __init__(self, email_service: EmailService, fallback_recipient: Optional[str] = None):
        """
        Args:
            email_service: Transport for the message
            fallback_recipient: Used when the organization has no fund_request_email
        """
        self.email_service = email_service
        self.fallback_recipient = fallback_recipient

    def recipient_for(self, casa_case: Optional[CasaCase]) -> Optional[str]:
        org = casa_case.casa_org if casa_case is not None else None
        if org is not None and org.fund_request_email:
            return org.fund_request_email
        return self.fallback_recipient

    def build_message(self, fund_request: FundRequest,
                      casa_case: Optional[CasaCase] = None) -> Optional[EmailMessage]:
        """The notice for a fund request, or None when nobody can receive it."""
        recipient = self.recipient_for(casa_case)
        if not recipient:
            return None

        context = {'fund_request': fund_request, 'casa_case': casa_case}
        return EmailMessage(
            subject=f"Fund request from {fund_request.submitter_email}",
            recipients=[recipient],
            cc=[fund_request.submitter_email] if fund_request.submitter_email else None,
            reply_to=fund_request.submitter_email,
            body_text=render_template('fund_request_mailer/send_request.txt', **context),
            body_html=render_template('fund_request_mailer/send_request.html', **context)
        )

    def send_request(self, fund_request: FundRequest,
                     casa_case: Optional[CasaCase] = None) -> Tuple[bool, str]:
        """
        Send the notice for a fund request.

        Returns:
            Tuple of (success: bool, message: str)
        """
        message = self.build_message(fund_request, casa_case)
        if message is None:
            logger.warning("No fund request recipient configured", fund_request_id=fund_request.id)
            return False, "No fund request recipient configured"
        return self.email_service.send_email(message)
