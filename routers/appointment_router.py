from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from Controller import appointment_controller
from core.security import require_api_key
from database import get_db
from model.appointment_schema import AppointmentRequest

router = APIRouter(prefix="/api/appointment", tags=["Appointments"], dependencies=[Depends(require_api_key)])

# booking form used by the patient-facing site
patient_router = APIRouter(
    prefix="/api/patient/appointment", tags=["Appointments"], dependencies=[Depends(require_api_key)]
)


# -------------------------------
# Admin desk
# -------------------------------
@router.post("/add", status_code=201)
def add_appointment(request: AppointmentRequest, db: Session = Depends(get_db)):
    return appointment_controller.book_appointment(db, request, require_date=True)


@router.get("/")
def list_appointments(db: Session = Depends(get_db)):
    return appointment_controller.list_appointments(db)


@router.get("/{appointment_id}")
def get_appointment(appointment_id: int, db: Session = Depends(get_db)):
    return appointment_controller.get_appointment(db, appointment_id)


@router.put("/edit/{appointment_id}")
def edit_appointment(appointment_id: int, request: AppointmentRequest, db: Session = Depends(get_db)):
    return appointment_controller.update_appointment(db, appointment_id, request)


@router.delete("/delete/{appointment_id}")
def delete_appointment(appointment_id: int, db: Session = Depends(get_db)):
    return appointment_controller.delete_appointment(db, appointment_id)


# -------------------------------
# Patient site
# -------------------------------
@patient_router.post("/add", status_code=201)
def book_appointment(request: AppointmentRequest, db: Session = Depends(get_db)):
    return appointment_controller.book_appointment(db, request, require_date=False)
