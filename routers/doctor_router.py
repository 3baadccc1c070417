from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session

from Controller import doctor_controller
from core.security import require_api_key
from database import get_db
from model.doctor_schema import UpdateDoctorRequest

router = APIRouter(prefix="/api/doctor", tags=["Doctors"], dependencies=[Depends(require_api_key)])


# Add a doctor (multipart: JSON "data" + optional profile photo)
@router.post("/add", status_code=201)
async def add_doctor(
    data: str = Form(...),
    profilePhoto: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    return await doctor_controller.add_doctor(db, data, profilePhoto)


# List doctors with search / department filter / pagination
@router.get("/")
def list_doctors(
    lang: str = "en",
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str = "",
    department: str = "",
    sort: str = "",
    db: Session = Depends(get_db),
):
    return doctor_controller.list_doctors(db, lang, page, limit, search, department, sort)


# Doctor by id or slug
@router.get("/{identifier}")
def get_doctor(identifier: str, lang: Optional[str] = None, db: Session = Depends(get_db)):
    return doctor_controller.get_doctor(db, identifier, lang)


@router.put("/edit/{doctor_id}")
def edit_doctor(doctor_id: int, request: UpdateDoctorRequest, db: Session = Depends(get_db)):
    return doctor_controller.update_doctor(db, doctor_id, request)


@router.delete("/delete/{doctor_id}")
def delete_doctor(doctor_id: int, db: Session = Depends(get_db)):
    return doctor_controller.delete_doctor(db, doctor_id)
