"""Pydantic schemas for API."""
from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime
from uuid import UUID


# Activation schemas
class ActivationRequest(BaseModel):
    token_id: UUID


class ActivationTokenResponse(BaseModel):
    id: UUID
    user_id: UUID
    used: bool
    expires_at: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)
