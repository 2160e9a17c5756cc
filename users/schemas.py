from typing import Optional

from pydantic import field_validator

from core.schemas import CamelModel, check_phone_number


class OTPRequest(CamelModel):
    phone_number: str

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, v):
        return check_phone_number(v)


class OTPVerify(CamelModel):
    phone_number: str
    otp: str

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, v):
        return check_phone_number(v)

    @field_validator("otp")
    @classmethod
    def validate_otp(cls, v):
        if len(v) != 6:
            raise ValueError("OTP must be 6 digits")
        return v


class UserResponse(CamelModel):
    id: int
    phone_number: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    is_verified: bool
