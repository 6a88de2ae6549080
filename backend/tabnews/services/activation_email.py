"""Activation email composition and dispatch."""
from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ..config import settings
from .endpoints import EndpointBuilder, get_endpoint_builder
from .mailer import send_email

ACTIVATION_EMAIL_SUBJECT = "Ative seu cadastro no TabNews"

ACTIVATION_EMAIL_TEMPLATE = """{username}, clique no link abaixo para ativar seu cadastro no TabNews:

{activation_page_endpoint}

Caso você não tenha feito esta requisição, ignore esse email.

Atenciosamente,
Equipe TabNews
Rua Antônio da Veiga, 495, Blumenau, SC, 89012-500"""


def build_activation_email_text(*, username: str, activation_page_endpoint: str) -> str:
    return ACTIVATION_EMAIL_TEMPLATE.format(
        username=username,
        activation_page_endpoint=activation_page_endpoint,
    )


def send_activation_email(
    user: Any,
    token_id: Any,
    *,
    endpoints: EndpointBuilder | None = None,
    mailer: Callable[..., None] = send_email,
) -> None:
    """Email the activation page link for token_id to user.email."""
    builder = endpoints or get_endpoint_builder()
    mailer(
        from_name=settings.EMAIL_FROM_NAME,
        from_address=settings.EMAIL_FROM_ADDRESS,
        to=user.email,
        subject=ACTIVATION_EMAIL_SUBJECT,
        text=build_activation_email_text(
            username=user.username,
            activation_page_endpoint=builder.activation_page_endpoint(token_id),
        ),
    )
