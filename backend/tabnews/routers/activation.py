"""Activation endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas import ActivationRequest, ActivationTokenResponse
from ..use_cases.activation import activate_user_using_token_id

router = APIRouter(prefix="/activation", tags=["activation"])


@router.patch("", response_model=ActivationTokenResponse)
def activate(payload: ActivationRequest, db: Session = Depends(get_db)):
    """Redeem an activation token."""
    token = activate_user_using_token_id(db=db, token_id=payload.token_id)
    return ActivationTokenResponse.model_validate(token)
