"""User directory: lookup and feature mutation for user records."""
from __future__ import annotations

from typing import Iterable
from uuid import UUID

from sqlalchemy.orm import Session

from ..domain_errors import NotFoundError
from ..models import User


def find_one_by_id(db: Session, user_id: UUID) -> User:
    """Load a user by id or raise NotFoundError."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError(
            f'O id "{user_id}" não foi encontrado no sistema.',
            action='Verifique se o "id" está digitado corretamente.',
            code="USER_NOT_FOUND",
        )
    return user


def add_features(db: Session, user_id: UUID, features: Iterable[str]) -> User:
    user = find_one_by_id(db, user_id)
    current = list(user.features or [])
    for feature in features:
        if feature not in current:
            current.append(feature)
    # Reassign so the ARRAY column is flagged dirty.
    user.features = current
    db.flush()
    return user


def remove_features(db: Session, user_id: UUID, features: Iterable[str]) -> User:
    user = find_one_by_id(db, user_id)
    to_remove = set(features)
    user.features = [feature for feature in (user.features or []) if feature not in to_remove]
    db.flush()
    return user
