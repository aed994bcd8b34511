# storefront/api/utils/email.py
from flask_mail import Message

from storefront.extensions import mail


def send_email(subject: str, recipients: list[str], body: str) -> Message:
    """Plain-text UTF-8 mail from MAIL_DEFAULT_SENDER."""
    msg = Message(subject=subject, recipients=recipients, body=body, charset="utf-8")
    mail.send(msg)
    return msg
