# ================== patient_controller.py ==================
from datetime import date
from typing import Optional

from fastapi import HTTPException, UploadFile
from sqlalchemy.orm import Session

from core.logging_config import get_logger
from core.uploads import PATIENT_IMAGE_EXTENSIONS, save_optional
from model.patient_model import Patient
from model.user_model import User

logger = get_logger(__name__)


def patient_to_dict(patient: Patient, include_user: bool = True) -> dict:
    data = {
        "id": patient.id,
        "name": patient.name,
        "phoneNumber": patient.phone_number,
        "email": patient.email,
        "gender": patient.gender,
        "bloodGroup": patient.blood_group,
        "dateOfBirth": patient.date_of_birth,
        "age": patient.age,
        "weight": patient.weight,
        "height": patient.height,
        "medicalHistory": patient.medical_history,
        "image": patient.image,
        "userId": patient.user_id,
        "createdAt": patient.created_at,
    }
    if include_user:
        data["user"] = user_to_dict(patient.user) if patient.user else None
    return data


def user_to_dict(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "mobile": user.mobile,
        "email": user.email,
        "username": user.username,
        "role": user.role,
        "profilePhoto": user.profile_photo,
        "isVerified": user.is_verified,
        "createdAt": user.created_at,
    }


def _parse_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        raise HTTPException(status_code=400, detail="dateOfBirth must be an ISO date (YYYY-MM-DD)")


def find_or_create_user(db: Session, name: str, mobile: str, email: Optional[str] = None):
    """Return ``(user, created)`` for the account owning ``mobile``."""
    user = db.query(User).filter(User.mobile == mobile).first()
    if user:
        return user, False
    user = User(name=name, mobile=mobile, email=email or None, role="patient")
    db.add(user)
    db.flush()
    logger.info("User %s created for mobile %s", user.id, mobile)
    return user, True


def resolve_patient(db: Session, name: str, mobile: str) -> Patient:
    """Find the patient behind a mobile number, creating the user and/or patient rows when missing."""
    user = db.query(User).filter(User.mobile == mobile).first()
    if user and user.patients:
        return user.patients[0]

    patient = db.query(Patient).filter(Patient.phone_number == mobile).first()
    if patient:
        if user and patient.user_id is None:
            patient.user_id = user.id
        return patient

    if not user:
        user, _ = find_or_create_user(db, name, mobile)
    patient = Patient(name=name, phone_number=mobile, user_id=user.id)
    db.add(patient)
    db.flush()
    logger.info("Patient %s created for user %s", patient.id, user.id)
    return patient


# ---------------- CRUD ----------------
async def add_patient(
    db: Session,
    name: Optional[str],
    phone_number: Optional[str],
    email: Optional[str] = None,
    gender: Optional[str] = None,
    blood_group: Optional[str] = None,
    date_of_birth: Optional[str] = None,
    age: Optional[str] = None,
    weight: Optional[str] = None,
    height: Optional[str] = None,
    medical_history: Optional[str] = None,
    image: Optional[UploadFile] = None,
) -> dict:
    if not name or not phone_number:
        raise HTTPException(status_code=400, detail="Name and phone number are required")

    existing = db.query(Patient).filter(Patient.phone_number == phone_number).first()
    if existing:
        raise HTTPException(
            status_code=400,
            detail={
                "error": "Patient with this phone number already exists",
                "existingPatient": {"id": existing.id, "name": existing.name, "userId": existing.user_id},
            },
        )

    dob = _parse_date(date_of_birth)
    image_path = await save_optional(image, subdir="patients", allowed_extensions=PATIENT_IMAGE_EXTENSIONS)
    user, user_created = find_or_create_user(db, name, phone_number, email)

    patient = Patient(
        name=name,
        phone_number=phone_number,
        email=email or None,
        gender=gender or None,
        blood_group=blood_group or None,
        date_of_birth=dob,
        age=age or None,
        weight=weight or None,
        height=height or None,
        medical_history=medical_history or None,
        image=image_path,
        user_id=user.id,
    )
    db.add(patient)
    db.commit()
    db.refresh(patient)

    logger.info("Patient %s added", patient.id)
    return {
        "message": "Patient added successfully",
        "patient": patient_to_dict(patient),
        "userCreated": user_created,
        "status": "success",
    }


def list_patients(db: Session) -> list:
    patients = db.query(Patient).order_by(Patient.created_at.desc(), Patient.id.desc()).all()
    return [patient_to_dict(p) for p in patients]


def get_patient(db: Session, patient_id: int) -> dict:
    patient = db.query(Patient).filter(Patient.id == patient_id).first()
    if not patient:
        raise HTTPException(status_code=404, detail="Patient not found")
    return patient_to_dict(patient)
