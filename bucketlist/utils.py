"""Utility functions for the application."""

import smtplib
from datetime import datetime, timezone

from flask import current_app, render_template
from flask_mail import Message

from .constants import SMTP_AUTH_ERROR_CODE
from .extensions import mail


class EmailError(Exception):
    """Base class for email errors."""

    pass


def normalize_email(email):
    """Return the canonical (trimmed, lower-cased) form of an email address."""
    return (email or "").strip().lower()


def utcnow():
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value):
    """Coerce a stored timestamp to an aware UTC datetime, or None."""
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def send_email(to, subject, template, **kwargs):
    """Send an email to a recipient.

    Raises:
        EmailError: If sending the email fails.
    """
    msg = Message(
        subject,
        recipients=[to],
        html=render_template(template, **kwargs),
        sender=current_app.config["MAIL_DEFAULT_SENDER"],
    )
    try:
        mail.send(msg)
    except smtplib.SMTPAuthenticationError as e:
        if e.smtp_code == SMTP_AUTH_ERROR_CODE:
            raise EmailError(
                "Authentication failed. Google requires you to use an App Password. "
                "Please verify your MAIL_USERNAME and MAIL_PASSWORD settings."
            ) from e
        raise EmailError(f"SMTP Authentication failed: {e}") from e
    except Exception as e:
        raise EmailError(f"Failed to send email: {e}") from e


def first_form_error(form):
    """Return the first validation message of a submitted form."""
    for field_name, messages in form.errors.items():
        if messages:
            field = getattr(form, field_name, None)
            label = field.label.text if field is not None else field_name
            return f"{label}: {messages[0]}"
    return "Validation failed."
