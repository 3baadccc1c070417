from fastapi import HTTPException
from sqlalchemy.orm import Session, joinedload

from Controller.patient_controller import patient_to_dict, resolve_patient
from core.logging_config import get_logger
from model.appointment_model import Appointment
from model.appointment_schema import AppointmentRequest
from model.doctor_model import Doctor, DoctorSchedule

logger = get_logger(__name__)

# fields copied as-is from the request onto the row
_PLAIN_FIELDS = (
    "doctor_name",
    "patient_name",
    "mobile_number",
    "appointment_date",
    "serial_number",
    "weight",
    "age",
    "consultation_fee",
    "vat",
    "promo_code",
    "director_reference",
    "reason",
    "address",
)


def normalize_blood_group(value):
    """``A+`` -> ``A_POSITIVE``, ``O-`` -> ``O_NEGATIVE``."""
    if not value:
        return None
    return value.strip().upper().replace("+", "_POSITIVE").replace("-", "_NEGATIVE")


def _upper(value):
    return value.strip().upper() if value else None


def appointment_to_dict(app: Appointment) -> dict:
    doctor = app.doctor
    return {
        "id": app.id,
        "doctorId": app.doctor_id,
        "doctorName": app.doctor_name,
        "patientId": app.patient_id,
        "patientName": app.patient_name,
        "mobileNumber": app.mobile_number,
        "appointmentDate": app.appointment_date,
        "scheduleId": app.schedule_id,
        "serialNumber": app.serial_number,
        "weight": app.weight,
        "age": app.age,
        "bloodGroup": app.blood_group,
        "consultationFee": app.consultation_fee,
        "vat": app.vat,
        "promoCode": app.promo_code,
        "consultationType": app.consultation_type,
        "paymentMethod": app.payment_method,
        "directorReference": app.director_reference,
        "reason": app.reason,
        "address": app.address,
        "status": app.status,
        "createdAt": app.created_at,
        "updatedAt": app.updated_at,
        "doctor": {"id": doctor.id, "slug": doctor.slug, "email": doctor.email, "translations": doctor.translations}
        if doctor
        else None,
        "patient": patient_to_dict(app.patient, include_user=False) if app.patient else None,
    }


def _query(db: Session):
    return db.query(Appointment).options(joinedload(Appointment.doctor), joinedload(Appointment.patient))


def _get_or_404(db: Session, appointment_id: int) -> Appointment:
    app = _query(db).filter(Appointment.id == appointment_id).first()
    if not app:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return app


def _apply_fields(app: Appointment, request: AppointmentRequest, only_set: bool) -> None:
    provided = request.model_fields_set
    for field in _PLAIN_FIELDS:
        if only_set and field not in provided:
            continue
        setattr(app, field, getattr(request, field))
    if not only_set or "blood_group" in provided:
        app.blood_group = normalize_blood_group(request.blood_group)
    if not only_set or "payment_method" in provided:
        app.payment_method = _upper(request.payment_method)
    if not only_set or "consultation_type" in provided:
        app.consultation_type = _upper(request.consultation_type)


# ---------------- Booking ----------------
def book_appointment(db: Session, request: AppointmentRequest, require_date: bool) -> dict:
    """Shared by the admin desk (date required) and the patient-facing form (schedule based)."""
    required = [request.doctor_id, request.doctor_name, request.patient_name, request.mobile_number]
    if require_date:
        required.append(request.appointment_date)
    if not all(required):
        detail = (
            "Doctor id, doctor name, patient name, mobile number, and appointment date are required"
            if require_date
            else "Doctor id, doctor name, patient name, and mobile number are required"
        )
        raise HTTPException(status_code=400, detail=detail)

    if not db.query(Doctor.id).filter(Doctor.id == request.doctor_id).first():
        raise HTTPException(status_code=400, detail="Doctor not found")
    if request.schedule_id is not None:
        schedule = db.query(DoctorSchedule).filter(DoctorSchedule.id == request.schedule_id).first()
        if not schedule or schedule.doctor_id != request.doctor_id:
            raise HTTPException(status_code=400, detail="Schedule not found for this doctor")

    patient_id = request.patient_id
    if request.is_new_patient or not patient_id:
        patient_id = resolve_patient(db, request.patient_name, request.mobile_number).id

    app = Appointment(
        doctor_id=request.doctor_id,
        patient_id=patient_id,
        schedule_id=request.schedule_id,
        status=request.status or "Pending",
    )
    _apply_fields(app, request, only_set=False)
    db.add(app)
    db.commit()

    logger.info("Appointment %s booked with doctor %s for patient %s", app.id, app.doctor_id, patient_id)
    return {"message": "Appointment added successfully", "appointment": appointment_to_dict(_get_or_404(db, app.id))}


def list_appointments(db: Session) -> dict:
    apps = _query(db).order_by(Appointment.id.desc()).all()
    return {"appointments": [appointment_to_dict(a) for a in apps]}


def get_appointment(db: Session, appointment_id: int) -> dict:
    return appointment_to_dict(_get_or_404(db, appointment_id))


def update_appointment(db: Session, appointment_id: int, request: AppointmentRequest) -> dict:
    app = _get_or_404(db, appointment_id)

    if "doctor_id" in request.model_fields_set and request.doctor_id:
        if not db.query(Doctor.id).filter(Doctor.id == request.doctor_id).first():
            raise HTTPException(status_code=400, detail="Doctor not found")
        app.doctor_id = request.doctor_id
    if "patient_id" in request.model_fields_set and request.patient_id:
        app.patient_id = request.patient_id
    if request.status:
        app.status = request.status

    _apply_fields(app, request, only_set=True)
    db.commit()

    logger.info("Appointment %s updated", appointment_id)
    return {"message": "Appointment updated successfully", "appointment": appointment_to_dict(_get_or_404(db, appointment_id))}


def delete_appointment(db: Session, appointment_id: int) -> dict:
    app = _get_or_404(db, appointment_id)
    data = appointment_to_dict(app)
    db.delete(app)
    db.commit()
    logger.info("Appointment %s deleted", appointment_id)
    return {"message": "Appointment deleted successfully", "appointment": data}
