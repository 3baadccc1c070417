from fastapi import HTTPException
from sqlalchemy.orm import Session

from core.logging_config import get_logger
from core.payloads import parse_json_field, require_object
from core.translations import load_stored, localize, merge_top_level
from model.blog_model import Category

logger = get_logger(__name__)


def _to_dict(cat: Category, translations: dict) -> dict:
    return {
        "id": cat.id,
        "translations": translations,
        "createdAt": cat.created_at,
        "updatedAt": cat.updated_at,
    }


def _get_or_404(db: Session, category_id: int) -> Category:
    cat = db.query(Category).filter(Category.id == category_id).first()
    if not cat:
        raise HTTPException(status_code=404, detail="Category not found")
    return cat


def create_category(db: Session, translations) -> dict:
    translations = require_object(translations, "Invalid translations format")
    cat = Category(translations=translations)
    db.add(cat)
    db.commit()
    db.refresh(cat)
    logger.info("Category %s created", cat.id)
    return {"message": "Category created successfully", "category": _to_dict(cat, cat.translations)}


def list_categories(db: Session) -> list:
    categories = db.query(Category).order_by(Category.id).all()
    return [_to_dict(cat, load_stored(cat.translations)) for cat in categories]


def get_category(db: Session, category_id: int, lang: str) -> dict:
    cat = _get_or_404(db, category_id)
    return _to_dict(cat, localize(load_stored(cat.translations), lang))


def update_category(db: Session, category_id: int, translations) -> dict:
    translations = require_object(parse_json_field("translations", translations), "Invalid translations format")
    cat = _get_or_404(db, category_id)
    cat.translations = merge_top_level(load_stored(cat.translations), translations)
    db.commit()
    db.refresh(cat)
    logger.info("Category %s updated", category_id)
    return {"message": "Category updated successfully", "category": _to_dict(cat, cat.translations)}


def delete_category(db: Session, category_id: int) -> dict:
    cat = _get_or_404(db, category_id)
    db.delete(cat)
    db.commit()
    logger.info("Category %s deleted", category_id)
    return {"message": "Category deleted successfully"}
