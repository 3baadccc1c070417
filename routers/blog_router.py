from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from Controller import blog_controller
from core.security import require_api_key
from database import get_db

router = APIRouter(prefix="/api/blogs", tags=["Blogs"], dependencies=[Depends(require_api_key)])


@router.post("/add", status_code=201)
async def add_blog(
    translations: str = Form(...),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    return await blog_controller.create_blog(db, translations, image)


@router.get("/")
def list_blogs(db: Session = Depends(get_db)):
    return blog_controller.list_blogs(db)


@router.get("/slug/{slug}")
def get_blog_by_slug(slug: str, db: Session = Depends(get_db)):
    return blog_controller.get_blog_by_slug(db, slug)


@router.get("/{blog_id}")
def get_blog(blog_id: int, db: Session = Depends(get_db)):
    return blog_controller.get_blog(db, blog_id)


@router.put("/edit/{blog_id}")
async def edit_blog(
    blog_id: int,
    translations: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    return await blog_controller.update_blog(db, blog_id, translations, image)


@router.delete("/delete/{blog_id}")
def delete_blog(blog_id: int, db: Session = Depends(get_db)):
    return blog_controller.delete_blog(db, blog_id)
