# ================== auth_controller.py ==================
import secrets
from datetime import datetime, timedelta

from fastapi import HTTPException
from sqlalchemy.orm import Session

from Controller.patient_controller import user_to_dict
from core import mailer, sms_client
from core.config import settings
from core.logging_config import get_logger
from core.security import create_access_token, hash_password
from model.auth_schema import EmailRegisterRequest, OtpLoginRequest, OtpRegisterRequest
from model.user_model import OTP, EmailOTP, PasswordReset, User

logger = get_logger(__name__)


def generate_otp() -> str:
    """Six random digits, never starting with zero."""
    return str(100000 + secrets.randbelow(900000))


# ---------------- SMS OTP ----------------
async def send_otp(db: Session, mobile_number: str) -> dict:
    if not mobile_number:
        raise HTTPException(status_code=400, detail="Mobile number is required")

    otp = generate_otp()
    expires_at = datetime.utcnow() + timedelta(minutes=settings.SMS_OTP_TTL_MINUTES)

    record = db.query(OTP).filter(OTP.mobile == mobile_number).first()
    if record:
        record.otp = otp
        record.expires_at = expires_at
        record.is_used = False
    else:
        db.add(OTP(mobile=mobile_number, otp=otp, expires_at=expires_at, is_used=False))
    db.commit()
    logger.info("OTP stored for %s", mobile_number)

    message = f"Your OTP is: {otp}. Valid for {settings.SMS_OTP_TTL_MINUTES} minutes."
    try:
        await sms_client.send_sms(mobile_number, message)
    except sms_client.SmsError as exc:
        logger.error("Error sending OTP to %s: %s", mobile_number, exc)
        raise HTTPException(status_code=500, detail="Failed to send OTP.")

    return {"status": "success", "message": "OTP sent successfully!"}


def _valid_otp(db: Session, mobile: str, otp: str) -> OTP:
    record = (
        db.query(OTP)
        .filter(
            OTP.mobile == mobile,
            OTP.otp == otp,
            OTP.is_used.is_(False),
            OTP.expires_at >= datetime.utcnow(),
        )
        .first()
    )
    if not record:
        raise HTTPException(status_code=400, detail="Invalid or expired OTP")
    return record


def register_with_otp(db: Session, request: OtpRegisterRequest) -> dict:
    if not request.name or not request.mobile or not request.otp:
        raise HTTPException(status_code=400, detail="Name, Mobile & OTP required")

    record = _valid_otp(db, request.mobile, request.otp)
    if db.query(User).filter(User.mobile == request.mobile).first():
        raise HTTPException(status_code=400, detail="User with this mobile number already exists")

    user = User(name=request.name, mobile=request.mobile, is_verified=True)
    db.add(user)
    record.is_used = True
    db.commit()
    db.refresh(user)

    logger.info("User %s registered via OTP", user.id)
    return {"status": "success", "message": "User registered successfully", "user": user_to_dict(user)}


def login_with_otp(db: Session, request: OtpLoginRequest) -> dict:
    if not request.mobile or not request.otp:
        raise HTTPException(status_code=400, detail="Mobile and OTP required")

    record = _valid_otp(db, request.mobile, request.otp)
    user = db.query(User).filter(User.mobile == request.mobile).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    record.is_used = True
    db.commit()

    token = create_access_token(user.id, user.mobile)
    logger.info("User %s logged in", user.id)
    return {"status": "success", "token": token, "user": user_to_dict(user)}


# ---------------- Email registration ----------------
async def register_with_email(db: Session, request: EmailRegisterRequest) -> dict:
    existing = (
        db.query(User)
        .filter((User.email == request.email) | (User.mobile == request.phone_number))
        .first()
    )
    if existing:
        raise HTTPException(status_code=400, detail="User with this email or phone number already exists")

    user = User(
        name=request.name,
        email=request.email,
        mobile=request.phone_number,
        password=hash_password(request.password),
    )
    db.add(user)

    otp = generate_otp()
    record = db.query(EmailOTP).filter(EmailOTP.email == request.email).first()
    if record:
        record.otp = otp
        record.created_at = datetime.utcnow()
    else:
        db.add(EmailOTP(email=request.email, otp=otp, created_at=datetime.utcnow()))
    db.flush()

    try:
        await mailer.send_email(
            [request.email],
            "Your OTP Code",
            f"<p>Your OTP code is: <strong>{otp}</strong></p>",
        )
    except HTTPException:
        db.rollback()
        raise
    db.commit()

    logger.info("User %s registered by email, OTP mailed", user.id)
    return {"message": "Registration successful. Please check your email for OTP."}


def verify_email_otp(db: Session, email: str, otp: str) -> dict:
    record = db.query(EmailOTP).filter(EmailOTP.email == email).first()
    if not record:
        raise HTTPException(status_code=400, detail="OTP not found. Please request a new one.")

    if datetime.utcnow() - record.created_at > timedelta(minutes=settings.EMAIL_OTP_TTL_MINUTES):
        db.delete(record)
        db.commit()
        raise HTTPException(status_code=400, detail="OTP has expired. Please request a new one.")

    if otp != record.otp:
        raise HTTPException(status_code=400, detail="Invalid OTP. Please try again.")

    db.delete(record)
    user = db.query(User).filter(User.email == email).first()
    if user:
        user.is_verified = True
    db.commit()

    logger.info("OTP verified for %s", email)
    return {"message": "OTP verified successfully!"}


# ---------------- Password reset ----------------
async def request_password_reset(db: Session, email: str) -> dict:
    user = db.query(User).filter(User.email == email).first()
    if not user:
        raise HTTPException(status_code=400, detail="User not found")

    now = datetime.utcnow()
    token = secrets.token_hex(32)
    db.add(
        PasswordReset(
            email=email,
            token=token,
            created_at=now,
            expires_at=now + timedelta(minutes=settings.RESET_TOKEN_TTL_MINUTES),
        )
    )
    db.flush()

    reset_link = f"{settings.FRONTEND_URL.rstrip('/')}/reset-password/{token}"
    try:
        await mailer.send_email(
            [email],
            "Password Reset Request",
            f'<p>Click <a href="{reset_link}">here</a> to reset your password.</p>',
        )
    except HTTPException:
        db.rollback()
        raise
    db.commit()

    logger.info("Password reset requested for user %s", user.id)
    return {"message": "Password reset link sent to your email."}


def reset_password(db: Session, token: str, password: str) -> dict:
    record = db.query(PasswordReset).filter(PasswordReset.token == token).first()
    if not record or record.expires_at < datetime.utcnow():
        if record:
            db.delete(record)
            db.commit()
        raise HTTPException(status_code=400, detail="Invalid or expired token.")

    user = db.query(User).filter(User.email == record.email).first()
    if not user:
        raise HTTPException(status_code=400, detail="Invalid or expired token.")

    user.password = hash_password(password)
    db.delete(record)
    db.commit()

    logger.info("Password reset for user %s", user.id)
    return {"message": "Password reset successfully!"}
