from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from Controller import cms_controller
from core.security import require_api_key
from database import get_db

header_router = APIRouter(prefix="/api/header", tags=["Header"], dependencies=[Depends(require_api_key)])
footer_router = APIRouter(prefix="/api/footer", tags=["Footer"], dependencies=[Depends(require_api_key)])
about_router = APIRouter(prefix="/api/about", tags=["About"], dependencies=[Depends(require_api_key)])


# ---------------- Header ----------------
@header_router.get("/")
def get_header(db: Session = Depends(get_db)):
    return cms_controller.get_header(db)


@header_router.post("/add", status_code=201)
async def add_header(
    data: Optional[str] = Form(None),
    logo: Optional[UploadFile] = File(None),
    contactIcon: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    return await cms_controller.create_header(db, data, logo, contactIcon)


@header_router.put("/")
async def update_header(
    data: Optional[str] = Form(None),
    logo: Optional[UploadFile] = File(None),
    contactIcon: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    return await cms_controller.update_header(db, data, logo, contactIcon)


# ---------------- Footer ----------------
@footer_router.post("/")
async def save_footer(
    language: str = Form("en"),
    description: Optional[str] = Form(None),
    contact: Optional[str] = Form(None),
    sections: Optional[str] = Form(None),
    copyright: Optional[str] = Form(None),
    socialLinks: Optional[str] = Form(None),
    listItems: Optional[str] = Form(None),
    footerLogo: Optional[UploadFile] = File(None),
    contactLogo: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    return await cms_controller.upsert_footer(
        db, language, description, contact, sections, copyright, socialLinks, listItems, footerLogo, contactLogo
    )


@footer_router.get("/")
def get_footer(db: Session = Depends(get_db)):
    return cms_controller.get_footer(db)


# ---------------- About ----------------
@about_router.post("/")
async def save_about(
    language: str = Form("en"),
    title: Optional[str] = Form(None),
    subtitle: Optional[str] = Form(None),
    tabs: Optional[str] = Form(None),
    heroImage: Optional[UploadFile] = File(None),
    callbackImage: Optional[UploadFile] = File(None),
    tabImages: Optional[List[UploadFile]] = File(None),
    db: Session = Depends(get_db),
):
    return await cms_controller.upsert_about(
        db, language, title, subtitle, tabs, heroImage, callbackImage, tabImages or []
    )


@about_router.get("/")
def get_about(db: Session = Depends(get_db)):
    return cms_controller.get_about(db)
