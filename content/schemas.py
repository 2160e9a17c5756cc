from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from pydantic import field_validator

from core.schemas import CamelModel


class ValidationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ContentSubmit(CamelModel):
    url: str
    hashtags: List[str] = []

    @field_validator("url")
    @classmethod
    def validate_url(cls, v):
        parsed = urlparse(v.strip())
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("Invalid URL format")
        return v.strip()


class ContentSubmissionResponse(CamelModel):
    id: int
    user_id: int
    social_account_id: Optional[int] = None
    content_url: str
    platform: str
    content_type: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    hashtags: List[str] = []
    is_approved: bool
    approval_notes: Optional[str] = None
    validation_status: ValidationStatus
    content_data: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime
