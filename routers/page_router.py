from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from Controller import page_controller
from core.security import require_api_key
from database import get_db
from model.content_schema import PageRequest

router = APIRouter(prefix="/api/page", tags=["Pages"], dependencies=[Depends(require_api_key)])


@router.post("/add", status_code=201)
def add_page(request: PageRequest, db: Session = Depends(get_db)):
    return page_controller.create_page(db, request)


@router.get("/")
def list_pages(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str = "",
    db: Session = Depends(get_db),
):
    return page_controller.list_pages(db, page, limit, search)


@router.get("/{page_id}")
def get_page(page_id: int, db: Session = Depends(get_db)):
    return page_controller.get_page(db, page_id)


@router.put("/edit/{page_id}")
def edit_page(page_id: int, request: PageRequest, db: Session = Depends(get_db)):
    return page_controller.update_page(db, page_id, request)


@router.delete("/delete/{page_id}")
def delete_page(page_id: int, db: Session = Depends(get_db)):
    return page_controller.delete_page(db, page_id)
