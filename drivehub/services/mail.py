from flask import current_app
from python_http_client.exceptions import BadRequestsError
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail


class InvalidRecipientError(Exception):
    """SendGrid refused the recipient address."""

    def __init__(self, to_email):
        super().__init__(f"invalid recipient: {to_email}")
        self.to_email = to_email


def _error_body(exc):
    body = getattr(exc, "body", b"") or b""
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    return body


def send_mail(to_email, subject, html):
    """Send one message. Returns ``(status_code, headers)``.

    Without a configured API key nothing is sent and ``(None, None)`` comes
    back. A 400 that names the recipient raises :class:`InvalidRecipientError`;
    every other failure propagates.
    """
    api_key = current_app.config.get("SENDGRID_API_KEY")
    if not api_key:
        current_app.logger.info("SENDGRID_API_KEY not set, skipping mail to %s: %s", to_email, subject)
        return None, None

    sg = SendGridAPIClient(api_key=api_key)
    message = Mail(from_email=(current_app.config["MAIL_FROM"], current_app.config["MAIL_FROM_NAME"]),
                   to_emails=to_email,
                   subject=subject,
                   html_content=html)
    try:
        resp = sg.send(message)
    except BadRequestsError as exc:
        body = _error_body(exc)
        if to_email in body or "personalizations.0.to" in body:
            raise InvalidRecipientError(to_email) from exc
        raise
    return resp.status_code, getattr(resp, "headers", None)
