"""
Candidate Email Service

Sends transactional emails through the SendGrid v3 HTTP API. Without an API
key every send is a logged no-op, so the gateway runs with email disabled.

Delivery failures raise EmailDeliveryError to whoever awaits the send. The
request handlers never await it directly; they hand sends to the
NotificationDispatcher, which logs and discards the outcome.
"""

import html as html_module
import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

SENDGRID_URL = "https://api.sendgrid.com/v3/mail/send"

_TEMPLATE_STYLE = "font-family: Arial, sans-serif; line-height: 1.6; color: #333;"

CONFIRMATION_TEMPLATE = """
<html>
<body style="{style}">
  <h2>Thank you for your application, {first_name}!</h2>
  <p>We've successfully received your application for the position.</p>
  <p>Our recruiting team will review your application and get back to you soon.</p>
  <p>In the meantime, you can:</p>
  <ul>
    <li>Track your application status in your dashboard</li>
    <li>Explore other open positions</li>
    <li>Connect with us on LinkedIn</li>
  </ul>
  <p>Best regards,<br>The Recruiting Team</p>
</body>
</html>
"""

INTERVIEW_TEMPLATE = """
<html>
<body style="{style}">
  <h2>Great news, {candidate_name}!</h2>
  <p>We'd like to invite you for an interview for the <strong>{job_title}</strong> position.</p>
  <p><strong>Interview Date:</strong> {interview_date}</p>
  <p>Please confirm your availability by replying to this email.</p>
  <p>We look forward to speaking with you!</p>
  <p>Best regards,<br>The Recruiting Team</p>
</body>
</html>
"""

OFFER_TEMPLATE = """
<html>
<body style="{style}">
  <h2>Congratulations, {candidate_name}!</h2>
  <p>We're excited to extend an offer for the <strong>{job_title}</strong> position.</p>
  <p>Please review the attached offer letter and let us know if you have any questions.</p>
  <p>We look forward to welcoming you to our team!</p>
  <p>Best regards,<br>The Recruiting Team</p>
</body>
</html>
"""

REJECTION_TEMPLATE = """
<html>
<body style="{style}">
  <p>Dear {candidate_name},</p>
  <p>Thank you for your interest in the <strong>{job_title}</strong> position and for taking the time to apply.</p>
  <p>After careful consideration, we have decided to move forward with other candidates whose qualifications more closely match our current needs.</p>
  <p>We appreciate your interest in our company and encourage you to apply for future positions that match your skills and experience.</p>
  <p>We wish you the best in your job search.</p>
  <p>Best regards,<br>The Recruiting Team</p>
</body>
</html>
"""


class EmailDeliveryError(Exception):
    """SendGrid rejected the message or could not be reached."""


def render(template: str, **values: str) -> str:
    escaped = {key: html_module.escape(str(value)) for key, value in values.items()}
    return template.format(style=_TEMPLATE_STYLE, **escaped)


class EmailService:
    """SendGrid-backed notifier."""

    def __init__(
        self,
        api_key: Optional[str],
        from_email: str = "noreply@company.com",
        from_name: str = "HR Recruiting",
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.from_email = from_email
        self.from_name = from_name
        self.timeout = timeout
        self._http_client = http_client

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def _skip(self) -> bool:
        if not self.enabled:
            logger.info("SendGrid API key not configured, skipping email")
            return True
        return False

    async def send_application_confirmation(self, email: str, first_name: str, job_id: str) -> bool:
        """
        Confirm receipt of an application.

        Returns:
            True if sent, False if email is disabled

        Raises:
            EmailDeliveryError: SendGrid failure
        """
        if self._skip():
            return False
        logger.info(f"Sending application confirmation for job {job_id}")
        html = render(CONFIRMATION_TEMPLATE, first_name=first_name)
        await self._send_email(email, "Application Received - Thank You for Applying!", html)
        return True

    async def send_status_update(self, application_id: str, status: str) -> bool:
        # Needs candidate email and job title from the upstream first
        if self._skip():
            return False
        logger.info(f"Would send status update email for application {application_id}: {status}")
        return False

    async def send_interview_invitation(
        self, email: str, candidate_name: str, job_title: str, interview_date: str
    ) -> bool:
        if self._skip():
            return False
        html = render(
            INTERVIEW_TEMPLATE,
            candidate_name=candidate_name,
            job_title=job_title,
            interview_date=interview_date,
        )
        await self._send_email(email, f"Interview Invitation - {job_title}", html)
        return True

    async def send_offer_letter(self, email: str, candidate_name: str, job_title: str) -> bool:
        if self._skip():
            return False
        html = render(OFFER_TEMPLATE, candidate_name=candidate_name, job_title=job_title)
        await self._send_email(email, f"Job Offer - {job_title}", html)
        return True

    async def send_rejection(self, email: str, candidate_name: str, job_title: str) -> bool:
        if self._skip():
            return False
        html = render(REJECTION_TEMPLATE, candidate_name=candidate_name, job_title=job_title)
        await self._send_email(email, f"Application Update - {job_title}", html)
        return True

    def _payload(self, to: str, subject: str, html_content: str) -> Dict[str, Any]:
        return {
            "personalizations": [{"to": [{"email": to}]}],
            "from": {"email": self.from_email, "name": self.from_name},
            "subject": subject,
            "content": [{"type": "text/html", "value": html_content}],
        }

    async def _send_email(self, to: str, subject: str, html_content: str) -> None:
        if not self.api_key:
            raise EmailDeliveryError("SendGrid API key not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = self._payload(to, subject, html_content)

        try:
            if self._http_client is not None:
                response = await self._http_client.post(SENDGRID_URL, json=payload, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(SENDGRID_URL, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise EmailDeliveryError(f"failed to send email: {e}") from e

        if not 200 <= response.status_code < 300:
            raise EmailDeliveryError(f"SendGrid returned status {response.status_code}")

        logger.info(f"Email sent successfully: {subject}")
