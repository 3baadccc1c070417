from typing import Optional

from fastapi import HTTPException, UploadFile
from sqlalchemy.orm import Session

from core.logging_config import get_logger
from core.payloads import parse_json_field, require_object
from core.translations import load_stored
from core.uploads import save_optional
from model.blog_model import Blog

logger = get_logger(__name__)


def blog_to_dict(blog: Blog) -> dict:
    return {
        "id": blog.id,
        "translations": load_stored(blog.translations),
        "image": blog.image,
        "createdAt": blog.created_at,
        "updatedAt": blog.updated_at,
    }


def _get_or_404(db: Session, blog_id: int) -> Blog:
    blog = db.query(Blog).filter(Blog.id == blog_id).first()
    if not blog:
        raise HTTPException(status_code=404, detail="Blog not found")
    return blog


async def create_blog(db: Session, translations: str, image: Optional[UploadFile]) -> dict:
    translations = require_object(parse_json_field("translations", translations), "Invalid translations format")
    blog = Blog(translations=translations, image=await save_optional(image))
    db.add(blog)
    db.commit()
    db.refresh(blog)
    logger.info("Blog %s created", blog.id)
    return {"message": "Blog created successfully", "blog": blog_to_dict(blog)}


def list_blogs(db: Session) -> list:
    return [blog_to_dict(b) for b in db.query(Blog).order_by(Blog.created_at.desc(), Blog.id.desc()).all()]


def get_blog(db: Session, blog_id: int) -> dict:
    return blog_to_dict(_get_or_404(db, blog_id))


def get_blog_by_slug(db: Session, slug: str) -> dict:
    # slugs live inside each language block, so the match is done here rather than in SQL
    for blog in db.query(Blog).order_by(Blog.id).all():
        for block in load_stored(blog.translations).values():
            if isinstance(block, dict) and block.get("slug") == slug:
                return blog_to_dict(blog)
    raise HTTPException(status_code=404, detail="Blog not found by slug")


async def update_blog(db: Session, blog_id: int, translations: Optional[str], image: Optional[UploadFile]) -> dict:
    blog = _get_or_404(db, blog_id)
    if translations is not None:
        blog.translations = require_object(
            parse_json_field("translations", translations), "Invalid translations format"
        )
    new_image = await save_optional(image)
    if new_image:
        blog.image = new_image
    db.commit()
    db.refresh(blog)
    logger.info("Blog %s updated", blog_id)
    return {"message": "Blog updated successfully", "blog": blog_to_dict(blog)}


def delete_blog(db: Session, blog_id: int) -> dict:
    blog = _get_or_404(db, blog_id)
    data = blog_to_dict(blog)
    db.delete(blog)
    db.commit()
    logger.info("Blog %s deleted", blog_id)
    return {"message": "Blog deleted successfully", "blog": data}
