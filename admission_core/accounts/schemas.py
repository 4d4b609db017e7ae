"""
Request Schemas
===============
Payloads accepted by the send-otp, verify-otp and reset-password routes.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class SendOTPRequest(BaseModel):
    # local part kept as submitted; codes are keyed on the exact address
    email: EmailStr


class VerifyOTPRequest(SendOTPRequest):
    otp: str = Field(min_length=1, max_length=10)

    @field_validator("otp")
    @classmethod
    def _digits_only(cls, value: str) -> str:
        value = value.strip()
        if not (value.isascii() and value.isdigit()):
            raise ValueError("otp must contain digits only")
        return value


class ResetPasswordRequest(VerifyOTPRequest):
    model_config = ConfigDict(populate_by_name=True)

    new_password: str = Field(alias="newPassword", min_length=6, max_length=128)
