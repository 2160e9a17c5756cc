from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import Field, field_validator

from core.schemas import CamelModel


class SocialAccountConnect(CamelModel):
    platform: str = Field(min_length=1, max_length=50)
    handle: str = Field(min_length=1, max_length=100)
    display_name: Optional[str] = None
    profile_url: Optional[str] = None
    followers_count: int = Field(0, ge=0)
    engagement_rate: Decimal = Field(Decimal("0"), ge=0, le=100)
    is_public: bool = False

    @field_validator("handle")
    @classmethod
    def validate_handle(cls, v):
        handle = v.strip().lstrip("@")
        if not handle:
            raise ValueError("Handle is required")
        return handle


class SocialAccountResponse(CamelModel):
    id: int
    user_id: int
    platform: str
    handle: str
    display_name: Optional[str] = None
    profile_url: Optional[str] = None
    followers_count: int
    engagement_rate: Decimal
    is_public: bool
    is_verified: bool
    verification_data: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime
