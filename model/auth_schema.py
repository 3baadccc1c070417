from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SendOtpRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mobile_number: Optional[str] = Field(default=None, alias="mobileNumber")


class OtpRegisterRequest(BaseModel):
    name: Optional[str] = None
    mobile: Optional[str] = None
    otp: Optional[str] = None


class OtpLoginRequest(BaseModel):
    mobile: Optional[str] = None
    otp: Optional[str] = None


class EmailRegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: EmailStr
    phone_number: str = Field(alias="phoneNumber")
    password: str


class VerifyOtpRequest(BaseModel):
    email: str
    otp: str


class ForgotPasswordRequest(BaseModel):
    email: str


class ResetPasswordRequest(BaseModel):
    password: str = Field(min_length=1)
