"""
Confirmation message - activation link and HTML body.
"""

from html import escape

from .models import Customer

CONFIRM_PATH = "/api/v1/auth/confirm-mail/"
CONFIRMATION_SUBJECT = "Confirmation mail"


def confirmation_link(host: str, token: str) -> str:
    """Build "<host>/api/v1/auth/confirm-mail/<token>"."""
    return host.rstrip("/") + CONFIRM_PATH + token


def confirmation_body(customer: Customer, link: str) -> str:
    """Render the HTML welcome message with the activation link."""
    return (
        "<html>\n"
        "<body>\n"
        f"<h3>Welcome, {escape(customer.full_name)}</h3>\n"
        f"<div>Please click <a href='{escape(link)}'>here</a> "
        "and confirm your email address</div>\n"
        "</body>\n"
        "</html>"
    )
