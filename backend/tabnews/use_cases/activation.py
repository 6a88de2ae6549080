"""Account activation use-cases: issue activation tokens and redeem them."""
from __future__ import annotations

import logging
from collections.abc import Callable
from uuid import UUID

from sqlalchemy.orm import Session

from ..authorization import ACTIVATED_USER_FEATURES, ACTIVATION_FEATURE, can
from ..domain_errors import ForbiddenError
from ..models import ActivationToken, User
from ..services import activation_tokens, users
from ..services.activation_email import send_activation_email
from ..services.endpoints import (
    EndpointBuilder,
    get_activation_api_endpoint,
    get_activation_page_endpoint,
)
from ..services.mailer import send_email

__all__ = [
    "send_activation_email_to_user",
    "find_one_token_by_user_id",
    "activate_user_using_token_id",
    "activate_user_by_user_id",
    "get_activation_api_endpoint",
    "get_activation_page_endpoint",
]

logger = logging.getLogger(__name__)


def send_activation_email_to_user(
    *,
    db: Session,
    user: User,
    endpoints: EndpointBuilder | None = None,
    mailer: Callable[..., None] = send_email,
) -> ActivationToken:
    """Issue a new activation token for user and email its link.

    The token is committed before the email goes out; a delivery failure
    propagates and leaves the token in place.
    """
    token = activation_tokens.create_token(db, user.id)
    token_id = token.id
    db.commit()

    send_activation_email(user, token_id, endpoints=endpoints, mailer=mailer)
    logger.info(f"Activation email sent to user {user.id} (token {token_id})")
    return token


def find_one_token_by_user_id(*, db: Session, user_id: UUID) -> ActivationToken:
    return activation_tokens.find_latest_token_by_user_id(db, user_id)


def activate_user_using_token_id(*, db: Session, token_id: UUID) -> ActivationToken:
    """Redeem token_id, activating its owner in a single transaction.

    Redeeming an already used token is a no-op that returns the token.
    """
    # Row lock serializes concurrent redemptions of the same token.
    token = activation_tokens.find_token_by_id(db, token_id, for_update=True)

    # Idempotent.
    if token.used:
        logger.warning(f"Activation token {token_id} already used; returning as-is")
        # Release the row lock; nothing to write.
        db.rollback()
        return token

    try:
        valid_token = activation_tokens.find_valid_token_by_id(db, token_id)
        activate_user_by_user_id(db=db, user_id=valid_token.user_id, commit=False)
        token = activation_tokens.mark_token_used(db, valid_token.id)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Activation token {token_id} redeemed")
    return token


def activate_user_by_user_id(*, db: Session, user_id: UUID, commit: bool = True) -> User:
    """Swap the activation feature for the regular member features."""
    user = users.find_one_by_id(db, user_id)

    if not can(user, ACTIVATION_FEATURE):
        logger.warning(f"User {user_id} lacks {ACTIVATION_FEATURE}; activation refused")
        raise ForbiddenError(
            f'O usuário "{user.username}" não pode ler o token de ativação.',
            action=(
                "Verifique se você está tentando ativar o usuário correto, se ele possui a "
                'feature "read:activation_token", ou se ele já está ativo.'
            ),
            code="ACTIVATION_FORBIDDEN",
        )

    users.remove_features(db, user.id, [ACTIVATION_FEATURE])
    user = users.add_features(db, user.id, ACTIVATED_USER_FEATURES)

    if commit:
        db.commit()
    logger.info(f"User {user_id} activated")
    return user
