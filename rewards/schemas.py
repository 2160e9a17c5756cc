import re
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import field_validator

from core.schemas import CamelModel, check_phone_number

PINCODE_PATTERN = re.compile(r"^[0-9]{6}$")


class ClaimStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"


class DeliveryAddress(CamelModel):
    name: str
    phone_number: str
    street: str
    city: str
    pincode: str
    state: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("Name is required")
        return v.strip()

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, v):
        return check_phone_number(v, "Invalid phone number")

    @field_validator("street")
    @classmethod
    def validate_street(cls, v):
        if not v.strip():
            raise ValueError("Address is required")
        return v.strip()

    @field_validator("city")
    @classmethod
    def validate_city(cls, v):
        if not v.strip():
            raise ValueError("City is required")
        return v.strip()

    @field_validator("pincode")
    @classmethod
    def validate_pincode(cls, v):
        if not PINCODE_PATTERN.match(v):
            raise ValueError("Invalid PIN code")
        return v


class ClaimRequest(CamelModel):
    address: DeliveryAddress
    content_submission_id: Optional[int] = None


class RewardClaimResponse(CamelModel):
    id: int
    user_id: int
    content_submission_id: Optional[int] = None
    campaign_name: str
    reward_type: str
    reward_value: Decimal
    delivery_address: DeliveryAddress
    status: ClaimStatus
    tracking_id: Optional[str] = None
    carrier_name: Optional[str] = None
    estimated_delivery: Optional[datetime] = None
    actual_delivery: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
