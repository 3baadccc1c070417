from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from Controller import department_controller
from core.security import require_api_key
from database import get_db
from model.content_schema import TranslationsRequest

router = APIRouter(prefix="/api/department", tags=["Departments"], dependencies=[Depends(require_api_key)])


@router.post("/", status_code=201)
def create_department(request: TranslationsRequest, db: Session = Depends(get_db)):
    return department_controller.create_department(db, request.translations)


@router.get("/")
def list_departments(lang: str = "en", db: Session = Depends(get_db)):
    return department_controller.list_departments(db, lang)


@router.get("/{department_id}")
def get_department(department_id: int, lang: str = "en", db: Session = Depends(get_db)):
    return department_controller.get_department(db, department_id, lang)


# Per-language merge of the translations object
@router.put("/{department_id}")
def update_department(department_id: int, request: TranslationsRequest, db: Session = Depends(get_db)):
    return department_controller.update_department(db, department_id, request.translations)


@router.delete("/{department_id}")
def delete_department(department_id: int, db: Session = Depends(get_db)):
    return department_controller.delete_department(db, department_id)
