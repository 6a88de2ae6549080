"""Feature-based authorization checks."""
from __future__ import annotations

from typing import Any

ACTIVATION_FEATURE = "read:activation_token"

# Granted once the account is activated.
ACTIVATED_USER_FEATURES: tuple[str, ...] = (
    "create:session",
    "read:session",
    "create:post",
    "create:comment",
    "update:user",
)


def can(user: Any, feature: str) -> bool:
    """Check if user holds a specific feature."""
    if user is None:
        return False
    features = getattr(user, "features", None) or ()
    return feature in features
