from fastapi import HTTPException
from sqlalchemy.orm import Session

from core.logging_config import get_logger
from core.payloads import require_object
from core.translations import localize, merge_per_language
from model.department_model import Department

logger = get_logger(__name__)


def _localized(dep: Department, lang: str) -> dict:
    return {
        "id": dep.id,
        "translations": localize(dep.translations, lang),
        "createdAt": dep.created_at,
        "updatedAt": dep.updated_at,
    }


def _full(dep: Department) -> dict:
    return {
        "id": dep.id,
        "translations": dep.translations or {},
        "createdAt": dep.created_at,
        "updatedAt": dep.updated_at,
    }


def _get_or_404(db: Session, department_id: int) -> Department:
    dep = db.query(Department).filter(Department.id == department_id).first()
    if not dep:
        raise HTTPException(status_code=404, detail="Department not found")
    return dep


def create_department(db: Session, translations) -> dict:
    translations = require_object(translations, "translations must be a valid JSON object.")
    dep = Department(translations=translations)
    db.add(dep)
    db.commit()
    db.refresh(dep)
    logger.info("Department %s created", dep.id)
    return {"message": "Department created successfully", "newDepartment": _full(dep)}


def list_departments(db: Session, lang: str) -> list:
    return [_localized(dep, lang) for dep in db.query(Department).order_by(Department.id).all()]


def get_department(db: Session, department_id: int, lang: str) -> dict:
    return _localized(_get_or_404(db, department_id), lang)


def update_department(db: Session, department_id: int, translations) -> dict:
    translations = require_object(translations, "translations must be a valid JSON object.")
    dep = _get_or_404(db, department_id)
    dep.translations = merge_per_language(dep.translations, translations)
    db.commit()
    db.refresh(dep)
    logger.info("Department %s updated", department_id)
    return {"message": "Department updated", "department": _full(dep)}


def delete_department(db: Session, department_id: int) -> dict:
    dep = _get_or_404(db, department_id)
    db.delete(dep)
    db.commit()
    logger.info("Department %s deleted", department_id)
    return {"message": "Department deleted"}
