import math

from fastapi import HTTPException
from sqlalchemy import or_
from sqlalchemy.orm import Session

from core.logging_config import get_logger
from model.content_schema import PageRequest
from model.page_model import Page

logger = get_logger(__name__)


def page_to_dict(page: Page) -> dict:
    return {
        "id": page.id,
        "name": page.name,
        "slug": page.slug,
        "translations": page.translations or {},
        "createdAt": page.created_at,
        "updatedAt": page.updated_at,
    }


def _get_or_404(db: Session, page_id: int) -> Page:
    page = db.query(Page).filter(Page.id == page_id).first()
    if not page:
        raise HTTPException(status_code=404, detail="Page not found")
    return page


def create_page(db: Session, request: PageRequest) -> dict:
    if not request.name or not request.slug or not request.translations:
        raise HTTPException(status_code=400, detail="Name, Slug, and Translations are required")
    page = Page(name=request.name, slug=request.slug, translations=request.translations)
    db.add(page)
    db.commit()
    db.refresh(page)
    logger.info("Page %s created (%s)", page.id, page.slug)
    return {"message": "Page created successfully", "page": page_to_dict(page)}


def list_pages(db: Session, page: int, limit: int, search: str) -> dict:
    query = db.query(Page)
    search = search.strip()
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(Page.slug.like(pattern), Page.name.like(pattern)))

    total = query.count()
    pages = (
        query.order_by(Page.created_at.desc(), Page.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return {
        "pages": [page_to_dict(p) for p in pages],
        "currentPage": page,
        "totalPages": math.ceil(total / limit),
    }


def get_page(db: Session, page_id: int) -> dict:
    return page_to_dict(_get_or_404(db, page_id))


def update_page(db: Session, page_id: int, request: PageRequest) -> dict:
    page = _get_or_404(db, page_id)
    if request.name is not None:
        page.name = request.name
    if request.slug is not None:
        page.slug = request.slug
    if request.translations is not None:
        page.translations = request.translations
    db.commit()
    db.refresh(page)
    logger.info("Page %s updated", page_id)
    return {"message": "Page updated successfully", "page": page_to_dict(page)}


def delete_page(db: Session, page_id: int) -> dict:
    page = _get_or_404(db, page_id)
    data = page_to_dict(page)
    db.delete(page)
    db.commit()
    logger.info("Page %s deleted", page_id)
    return {"message": "Page deleted successfully", "page": data}
