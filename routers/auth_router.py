from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from Controller import auth_controller
from Controller.patient_controller import user_to_dict
from core.config import settings
from core.security import get_current_user
from database import get_db
from model.auth_schema import (
    EmailRegisterRequest,
    ForgotPasswordRequest,
    OtpLoginRequest,
    OtpRegisterRequest,
    ResetPasswordRequest,
    SendOtpRequest,
    VerifyOtpRequest,
)
from model.user_model import User

AUTH_COOKIE = "authToken"

router = APIRouter(prefix="/api/auth", tags=["Auth"])
register_router = APIRouter(prefix="/api/register", tags=["Auth"])
verify_router = APIRouter(prefix="/api/verify-otp", tags=["Auth"])
password_router = APIRouter(prefix="/api/forgot-password", tags=["Auth"])


def _secure_cookie() -> bool:
    return settings.PUBLIC_BASE_URL.startswith("https://")


# -------------------------------
# SMS OTP
# -------------------------------
@router.post("/send-otp")
async def send_otp(request: SendOtpRequest, db: Session = Depends(get_db)):
    return await auth_controller.send_otp(db, request.mobile_number)


@router.post("/register")
def register(request: OtpRegisterRequest, db: Session = Depends(get_db)):
    return auth_controller.register_with_otp(db, request)


@router.post("/login")
def login(request: OtpLoginRequest, response: Response, db: Session = Depends(get_db)):
    result = auth_controller.login_with_otp(db, request)
    response.set_cookie(
        AUTH_COOKIE,
        result["token"],
        httponly=True,
        secure=_secure_cookie(),
        samesite="strict",
        max_age=settings.JWT_EXPIRE_DAYS * 24 * 3600,
    )
    return result


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(AUTH_COOKIE, httponly=True, secure=_secure_cookie(), samesite="strict")
    return {"status": "success", "message": "Logged out successfully"}


@router.get("/profile")
def profile(user: User = Depends(get_current_user)):
    return user_to_dict(user)


# -------------------------------
# Email registration
# -------------------------------
@register_router.post("")
async def register_by_email(request: EmailRegisterRequest, db: Session = Depends(get_db)):
    return await auth_controller.register_with_email(db, request)


@verify_router.post("")
def verify_otp(request: VerifyOtpRequest, db: Session = Depends(get_db)):
    return auth_controller.verify_email_otp(db, request.email, request.otp)


# -------------------------------
# Password reset
# -------------------------------
@password_router.post("")
async def forgot_password(request: ForgotPasswordRequest, db: Session = Depends(get_db)):
    return await auth_controller.request_password_reset(db, request.email)


@password_router.post("/reset-password/{token}")
def reset_password(token: str, request: ResetPasswordRequest, db: Session = Depends(get_db)):
    return auth_controller.reset_password(db, token, request.password)
