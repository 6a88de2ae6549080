"""Activation token persistence (activate_account_tokens)."""
from __future__ import annotations

import logging
from datetime import timedelta
from uuid import UUID, uuid4

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..config import settings
from ..domain_errors import NotFoundError
from ..models import ActivationToken

logger = logging.getLogger(__name__)


def _token_not_found(token_id: UUID) -> NotFoundError:
    return NotFoundError(
        f'O token "{token_id}" não foi encontrado no sistema ou expirou.',
        action="Faça um novo cadastro.",
        code="ACTIVATION_TOKEN_NOT_FOUND",
    )


def create_token(db: Session, user_id: UUID) -> ActivationToken:
    """Insert a fresh unused token for user; caller owns the commit."""
    # Database clock, same as the validity check.
    expires_at = func.now() + timedelta(minutes=settings.ACTIVATION_TOKEN_EXPIRE_MINUTES)
    token = ActivationToken(
        id=uuid4(),
        user_id=user_id,
        used=False,
        expires_at=expires_at,
    )
    db.add(token)
    db.flush()
    db.refresh(token)
    logger.info(f"Created activation token {token.id} for user {user_id}")
    return token


def find_latest_token_by_user_id(db: Session, user_id: UUID) -> ActivationToken:
    token = db.query(ActivationToken).filter(
        ActivationToken.user_id == user_id,
    ).order_by(ActivationToken.created_at.desc()).first()
    if not token:
        raise NotFoundError(
            f'O token relacionado ao userId "{user_id}" não foi encontrado no sistema.',
            action='Verifique se o "id" do usuário está digitado corretamente.',
            code="ACTIVATION_TOKEN_NOT_FOUND",
        )
    return token


def find_token_by_id(db: Session, token_id: UUID, *, for_update: bool = False) -> ActivationToken:
    """Load token regardless of state; for_update holds a row lock until commit/rollback."""
    query = db.query(ActivationToken).filter(ActivationToken.id == token_id)
    if for_update:
        query = query.with_for_update()
    token = query.first()
    if not token:
        raise _token_not_found(token_id)
    return token


def find_valid_token_by_id(db: Session, token_id: UUID) -> ActivationToken:
    """Load token only if unused and unexpired (server clock).

    Missing, used and expired tokens are reported with the same error.
    """
    token = db.query(ActivationToken).filter(
        ActivationToken.id == token_id,
        ActivationToken.used.is_(False),
        ActivationToken.expires_at >= func.now(),
    ).first()
    if not token:
        raise _token_not_found(token_id)
    return token


def mark_token_used(db: Session, token_id: UUID) -> ActivationToken:
    token = find_token_by_id(db, token_id)
    token.used = True
    db.flush()
    return token
