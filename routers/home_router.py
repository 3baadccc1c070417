from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from Controller import home_controller
from core.security import require_api_key
from database import get_db
from model.content_schema import CopyTranslationsRequest, SectionUpdateRequest

router = APIRouter(prefix="/api/home", tags=["Homepage"], dependencies=[Depends(require_api_key)])


@router.get("/")
def get_homepage(db: Session = Depends(get_db)):
    return home_controller.get_homepage(db)


# Create the homepage (multipart: JSON sections + any number of icon/image files)
@router.post("/", status_code=201)
async def create_homepage(request: Request, language: Optional[str] = None, db: Session = Depends(get_db)):
    form = await request.form()
    return await home_controller.create_homepage(db, form, language)


@router.post("/copy-translations")
def copy_translations(request: CopyTranslationsRequest, db: Session = Depends(get_db)):
    return home_controller.copy_translations(db, request.source_language, request.target_language)


@router.put("/{section}")
def update_section(section: str, request: SectionUpdateRequest, db: Session = Depends(get_db)):
    return home_controller.update_homepage_section(db, section, request.language, request.translations)


def _image_route(endpoint: str):
    async def upload_image(request: Request, language: Optional[str] = None, db: Session = Depends(get_db)):
        form = await request.form()
        return await home_controller.upload_section_image(db, endpoint, form, language)

    upload_image.__name__ = endpoint
    return upload_image


def _icon_route(endpoint: str):
    async def upload_icons(request: Request, language: Optional[str] = None, db: Session = Depends(get_db)):
        form = await request.form()
        return await home_controller.upload_section_icons(db, endpoint, form, language)

    upload_icons.__name__ = endpoint
    return upload_icons


for _endpoint in home_controller.IMAGE_ENDPOINTS:
    router.add_api_route(f"/{_endpoint}", _image_route(_endpoint), methods=["POST"])

for _endpoint in home_controller.ICON_ENDPOINTS:
    router.add_api_route(f"/{_endpoint}", _icon_route(_endpoint), methods=["POST"])
