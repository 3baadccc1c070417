# ================== doctor_controller.py ==================
from typing import Optional

from fastapi import HTTPException, UploadFile
from slugify import slugify
from sqlalchemy.orm import Session, selectinload

from core.logging_config import get_logger
from core.payloads import parse_json_field, require_object, validate_payload
from core.translations import DEFAULT_LANG, localize
from core.uploads import save_optional
from model.appointment_model import Appointment
from model.doctor_model import (
    Doctor,
    DoctorAward,
    DoctorCondition,
    DoctorFaq,
    DoctorMembership,
    DoctorSchedule,
    DoctorTreatment,
)
from model.doctor_schema import CreateDoctorRequest, UpdateDoctorRequest

logger = get_logger(__name__)

PLACEHOLDER_ICON = "https://placehold.co/100"
TRANSLATIONS_ERROR = "Translations must be a valid JSON object."

_LOAD_CHILDREN = (
    selectinload(Doctor.memberships),
    selectinload(Doctor.awards),
    selectinload(Doctor.treatments),
    selectinload(Doctor.conditions),
    selectinload(Doctor.schedule),
    selectinload(Doctor.faqs),
)


# ---------------- Serialization ----------------
def doctor_to_dict(doctor: Doctor) -> dict:
    return {
        "id": doctor.id,
        "email": doctor.email,
        "slug": doctor.slug,
        "icon": doctor.icon,
        "translations": doctor.translations or {},
        "memberships": [{"id": m.id, "name": m.name} for m in doctor.memberships],
        "awards": [{"id": a.id, "title": a.title} for a in doctor.awards],
        "treatments": [{"id": t.id, "name": t.name} for t in doctor.treatments],
        "conditions": [{"id": c.id, "name": c.name} for c in doctor.conditions],
        "schedule": [
            {"id": s.id, "day": s.day, "startTime": s.start_time, "endTime": s.end_time}
            for s in doctor.schedule
        ],
        "faqs": [{"id": f.id, "question": f.question, "answer": f.answer} for f in doctor.faqs],
        "createdAt": doctor.created_at,
        "updatedAt": doctor.updated_at,
    }


def doctor_localized(doctor: Doctor, lang: str) -> dict:
    return {
        "id": doctor.id,
        "email": doctor.email,
        "slug": doctor.slug,
        "profilePhoto": doctor.icon,
        "translations": localize(doctor.translations, lang),
        "memberships": [m.name for m in doctor.memberships],
        "awards": [a.title for a in doctor.awards],
        "treatments": [t.name for t in doctor.treatments],
        "conditions": [c.name for c in doctor.conditions],
        "schedule": [{"day": s.day, "startTime": s.start_time, "endTime": s.end_time} for s in doctor.schedule],
        "faqs": [{"question": f.question, "answer": f.answer} for f in doctor.faqs],
    }


# ---------------- Slug ----------------
def display_name(translations: dict) -> str:
    for lang in ("en", "bn"):
        block = translations.get(lang) if isinstance(translations, dict) else None
        if isinstance(block, dict) and block.get("name"):
            return block["name"]
    return "unknown"


def generate_unique_slug(db: Session, name: str, exclude_id: Optional[int] = None) -> str:
    base = slugify(name) or "unknown"
    slug = base
    counter = 1
    while True:
        query = db.query(Doctor.id).filter(Doctor.slug == slug)
        if exclude_id is not None:
            query = query.filter(Doctor.id != exclude_id)
        if not query.first():
            return slug
        slug = f"{base}-{counter}"
        counter += 1


def _set_children(doctor: Doctor, payload) -> None:
    if payload.memberships is not None:
        doctor.memberships = [DoctorMembership(name=m.name) for m in payload.memberships]
    if payload.awards is not None:
        doctor.awards = [DoctorAward(title=a.title) for a in payload.awards]
    if payload.treatments is not None:
        doctor.treatments = [DoctorTreatment(name=t.name) for t in payload.treatments]
    if payload.conditions is not None:
        doctor.conditions = [DoctorCondition(name=c.name) for c in payload.conditions]
    if payload.schedule is not None:
        doctor.schedule = [
            DoctorSchedule(day=s.day, start_time=s.start_time, end_time=s.end_time) for s in payload.schedule
        ]
    if payload.faqs is not None:
        doctor.faqs = [DoctorFaq(question=f.question, answer=f.answer) for f in payload.faqs]


def _get_or_404(db: Session, doctor_id: int) -> Doctor:
    doctor = db.query(Doctor).options(*_LOAD_CHILDREN).filter(Doctor.id == doctor_id).first()
    if not doctor:
        raise HTTPException(status_code=404, detail="Doctor not found")
    return doctor


# ---------------- CRUD ----------------
async def add_doctor(db: Session, data: str, profile_photo: Optional[UploadFile] = None) -> dict:
    payload = validate_payload(CreateDoctorRequest, parse_json_field("data", data))

    if not payload.email:
        raise HTTPException(status_code=400, detail="Email is required")
    translations = require_object(payload.translations, TRANSLATIONS_ERROR)

    if db.query(Doctor).filter(Doctor.email == payload.email).first():
        raise HTTPException(status_code=400, detail="A doctor with this email already exists.")

    icon = await save_optional(profile_photo) or PLACEHOLDER_ICON
    doctor = Doctor(
        email=payload.email,
        slug=generate_unique_slug(db, display_name(translations)),
        icon=icon,
        translations=translations,
    )
    _set_children(doctor, payload)
    db.add(doctor)
    db.commit()
    db.refresh(doctor)

    logger.info("Doctor %s added with slug %s", doctor.id, doctor.slug)
    return {"message": "Doctor added successfully", "doctor": doctor_to_dict(doctor)}


def list_doctors(
    db: Session,
    lang: str = DEFAULT_LANG,
    page: int = 1,
    limit: int = 10,
    search: str = "",
    department: str = "",
    sort: str = "",
) -> list:
    query = db.query(Doctor).options(*_LOAD_CHILDREN)

    if search:
        pattern = f"%{search}%"
        query = query.filter(
            Doctor.translations[("en", "name")].as_string().ilike(pattern)
            | Doctor.translations[("bn", "name")].as_string().ilike(pattern)
        )
    if department:
        query = query.filter(Doctor.translations[(lang, "department")].as_string() == department)

    if sort == "experience":
        query = query.order_by(Doctor.translations[(lang, "yearsOfExperience")].as_integer().desc(), Doctor.id)
    else:
        query = query.order_by(Doctor.id)

    doctors = query.offset((page - 1) * limit).limit(limit).all()
    return [doctor_to_dict(d) for d in doctors]


def get_doctor(db: Session, identifier: str, lang: Optional[str] = None) -> dict:
    query = db.query(Doctor).options(*_LOAD_CHILDREN)
    if identifier.isdigit():
        doctor = query.filter((Doctor.id == int(identifier)) | (Doctor.slug == identifier)).first()
    else:
        doctor = query.filter(Doctor.slug == identifier).first()
    if not doctor:
        raise HTTPException(status_code=404, detail="Doctor not found")

    if lang:
        return doctor_localized(doctor, lang)
    return doctor_to_dict(doctor)


def update_doctor(db: Session, doctor_id: int, payload: UpdateDoctorRequest) -> dict:
    translations = require_object(payload.translations, TRANSLATIONS_ERROR)
    doctor = _get_or_404(db, doctor_id)

    if payload.slug:
        taken = db.query(Doctor.id).filter(Doctor.slug == payload.slug, Doctor.id != doctor_id).first()
        if taken:
            raise HTTPException(status_code=400, detail="Slug already in use")
        doctor.slug = payload.slug
    else:
        doctor.slug = generate_unique_slug(db, display_name(translations), exclude_id=doctor_id)

    doctor.translations = translations
    _set_children(doctor, payload)
    db.commit()
    db.refresh(doctor)

    logger.info("Doctor %s updated", doctor_id)
    return {"message": "Doctor updated successfully", "doctor": doctor_to_dict(doctor)}


def delete_doctor(db: Session, doctor_id: int) -> dict:
    doctor = _get_or_404(db, doctor_id)
    # appointments keep a required reference to their doctor
    if db.query(Appointment.id).filter(Appointment.doctor_id == doctor_id).first():
        raise HTTPException(status_code=400, detail="Doctor has appointments and cannot be deleted")
    db.delete(doctor)
    db.commit()
    logger.info("Doctor %s deleted", doctor_id)
    return {"message": "Doctor deleted successfully"}
