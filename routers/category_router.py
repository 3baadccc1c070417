from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from Controller import category_controller
from core.security import require_api_key
from database import get_db
from model.content_schema import TranslationsRequest

router = APIRouter(prefix="/api/category", tags=["Categories"], dependencies=[Depends(require_api_key)])


@router.post("/", status_code=201)
def create_category(request: TranslationsRequest, db: Session = Depends(get_db)):
    return category_controller.create_category(db, request.translations)


@router.get("/")
def list_categories(db: Session = Depends(get_db)):
    return category_controller.list_categories(db)


@router.get("/{category_id}")
def get_category(category_id: int, lang: str = "en", db: Session = Depends(get_db)):
    return category_controller.get_category(db, category_id, lang)


@router.put("/{category_id}")
def update_category(category_id: int, request: TranslationsRequest, db: Session = Depends(get_db)):
    return category_controller.update_category(db, category_id, request.translations)


@router.delete("/{category_id}")
def delete_category(category_id: int, db: Session = Depends(get_db)):
    return category_controller.delete_category(db, category_id)
