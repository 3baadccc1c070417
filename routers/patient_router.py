from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from Controller import patient_controller
from core.security import require_api_key
from database import get_db

router = APIRouter(prefix="/api/patient", tags=["Patients"], dependencies=[Depends(require_api_key)])


# Register a patient (multipart, optional photo)
@router.post("/add", status_code=201)
async def add_patient(
    name: Optional[str] = Form(None),
    phoneNumber: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    gender: Optional[str] = Form(None),
    bloodGroup: Optional[str] = Form(None),
    dateOfBirth: Optional[str] = Form(None),
    age: Optional[str] = Form(None),
    weight: Optional[str] = Form(None),
    height: Optional[str] = Form(None),
    medicalHistory: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    return await patient_controller.add_patient(
        db,
        name,
        phoneNumber,
        email=email,
        gender=gender,
        blood_group=bloodGroup,
        date_of_birth=dateOfBirth,
        age=age,
        weight=weight,
        height=height,
        medical_history=medicalHistory,
        image=image,
    )


@router.get("/")
def list_patients(db: Session = Depends(get_db)):
    return patient_controller.list_patients(db)


@router.get("/{patient_id}")
def get_patient(patient_id: int, db: Session = Depends(get_db)):
    return patient_controller.get_patient(db, patient_id)
