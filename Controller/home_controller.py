# ================== home_controller.py ==================
"""
Homepage content.

The homepage is one row with seven named sections; every section keeps its
own ``translations`` object keyed by language. Forms for this page send an
open-ended set of file fields (``featureIcon_0``, ``serviceIcon_3``,
``aboutImages`` ...), so the routes hand over the whole parsed form and the
files are picked out here by field name.
"""
import re
from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session, selectinload
from starlette.datastructures import FormData, UploadFile

from core.logging_config import get_logger
from core.payloads import parse_json_field
from core.uploads import save_upload
from model.cms_model import HOMEPAGE_SECTIONS, SINGLETON_ID, Homepage, HomepageSection

logger = get_logger(__name__)

# list-valued sections are replaced per language instead of merged
LIST_SECTIONS = ("featuresSection", "appointmentProcess")

FEATURE_TEMPLATE = {"subtitle": "", "title": "", "icon": ""}
SERVICE_TEMPLATE = {"serviceTitle": "", "serviceIcon": ""}
WHY_CHOOSE_SERVICE_TEMPLATE = {"serviceTitle": "", "serviceDescription": "", "serviceIcon": ""}
PROCESS_TEMPLATE = {"title": "", "icon": ""}

# route -> (file field, section, key inside the language block)
IMAGE_ENDPOINTS = {
    "uploadHeroImage": ("heroBackgroundImage", "heroSection", "backgroundImage"),
    "uploadAppointmentImage": ("appointmentImage", "appointmentSection", "image"),
    "uploadWhyChooseImage": ("whyChooseUsImage", "whyChooseUsSection", "image"),
    "uploadDownloadAppImage": ("downloadAppImage", "downloadAppSection", "image"),
    "uploadAboutImages": ("aboutImages", "aboutSection", "images"),
}

# route -> (field prefix, section, list key inside the block or None, item template)
ICON_ENDPOINTS = {
    "uploadFeatureIcons": ("featureIcon_", "featuresSection", None, FEATURE_TEMPLATE),
    "uploadServiceIcons": ("serviceIcon_", "aboutSection", "services", SERVICE_TEMPLATE),
    "uploadWhyChooseServiceIcons": (
        "whyChooseServiceIcon_",
        "whyChooseUsSection",
        "services",
        WHY_CHOOSE_SERVICE_TEMPLATE,
    ),
    "uploadAppointmentProcessIcons": ("appointmentProcessIcon_", "appointmentProcess", None, PROCESS_TEMPLATE),
}

MAX_ABOUT_IMAGES = 4


# ---------------- Form helpers ----------------
def form_files(form: FormData) -> List[tuple]:
    return [(key, value) for key, value in form.multi_items() if isinstance(value, UploadFile) and value.filename]


def ensure_list(data: Any, nested_field: Optional[str] = None) -> list:
    if not data:
        return []
    if nested_field and isinstance(data, dict) and nested_field in data:
        value = data[nested_field]
        return list(value) if isinstance(value, list) else [value]
    if isinstance(data, list):
        return list(data)
    return [data]


async def apply_indexed_icons(files: List[tuple], prefix: str, items: list, template: dict) -> list:
    """Set ``icon`` on ``items[i]`` for every ``<prefix><i>`` file, padding the list with templates."""
    pattern = re.compile(rf"^{re.escape(prefix)}(\d+)$")
    items = [dict(item) if isinstance(item, dict) else item for item in items]
    for field, upload in files:
        match = pattern.match(field)
        if not match:
            continue
        index = int(match.group(1))
        while len(items) <= index:
            items.append(dict(template))
        if not isinstance(items[index], dict):
            items[index] = dict(template)
        items[index]["icon"] = await save_upload(upload)
    return items


async def first_image(files: List[tuple], field_name: str) -> str:
    for field, upload in files:
        if field == field_name:
            return await save_upload(upload)
    return ""


def form_language(form: FormData, query_language: Optional[str]) -> str:
    return query_language or form.get("language") or "en"


# ---------------- Serialization ----------------
def homepage_to_dict(homepage: Homepage) -> dict:
    data: Dict[str, Any] = {"id": homepage.id, "createdAt": homepage.created_at, "updatedAt": homepage.updated_at}
    for name in HOMEPAGE_SECTIONS:
        sec = homepage.section(name)
        data[name] = section_to_dict(sec) if sec else None
    return data


def section_to_dict(section: HomepageSection) -> dict:
    return {"id": section.id, "name": section.name, "translations": section.translations or {}}


def _load_homepage(db: Session) -> Optional[Homepage]:
    return (
        db.query(Homepage)
        .options(selectinload(Homepage.sections))
        .filter(Homepage.id == SINGLETON_ID)
        .first()
    )


def _section_or_404(db: Session, section_name: str) -> HomepageSection:
    homepage = _load_homepage(db)
    section = homepage.section(section_name) if homepage else None
    if not section:
        raise HTTPException(status_code=404, detail=f"{section_name} not found")
    return section


def update_section(db: Session, section_name: str, language: str, data: Any, replace: bool = False) -> HomepageSection:
    """Write one language block of a section: lists replace, objects shallow-merge unless ``replace``."""
    section = _section_or_404(db, section_name)
    current = dict(section.translations or {})
    existing_block = current.get(language)
    if replace or isinstance(data, list) or not isinstance(existing_block, dict):
        current[language] = data
    else:
        current[language] = {**existing_block, **data}
    section.translations = current
    db.commit()
    db.refresh(section)
    return section


# ---------------- Operations ----------------
def get_homepage(db: Session) -> dict:
    homepage = _load_homepage(db)
    if not homepage:
        raise HTTPException(status_code=404, detail="Homepage not found")
    return homepage_to_dict(homepage)


async def create_homepage(db: Session, form: FormData, query_language: Optional[str]) -> dict:
    if db.query(Homepage.id).filter(Homepage.id == SINGLETON_ID).first():
        raise HTTPException(status_code=400, detail="Homepage already exists. Use PUT to update.")

    language = form_language(form, query_language)
    files = form_files(form)

    hero = parse_json_field("heroSection", form.get("heroSection"), {})
    features = parse_json_field("featuresSection", form.get("featuresSection"), {})
    about = parse_json_field("aboutSection", form.get("aboutSection"), {})
    appointment = parse_json_field("appointmentSection", form.get("appointmentSection"), {})
    why_choose = parse_json_field("whyChooseUsSection", form.get("whyChooseUsSection"), {})
    download_app = parse_json_field("downloadAppSection", form.get("downloadAppSection"), {})
    process = parse_json_field("appointmentProcess", form.get("appointmentProcess"), [])

    for name, value in (
        ("heroSection", hero),
        ("aboutSection", about),
        ("appointmentSection", appointment),
        ("whyChooseUsSection", why_choose),
        ("downloadAppSection", download_app),
    ):
        if not isinstance(value, dict):
            raise HTTPException(status_code=400, detail=f"{name} must be a JSON object")

    features = await apply_indexed_icons(files, "featureIcon_", ensure_list(features, "features"), FEATURE_TEMPLATE)
    about["services"] = await apply_indexed_icons(
        files, "serviceIcon_", ensure_list(about.get("services")), SERVICE_TEMPLATE
    )
    why_choose["services"] = await apply_indexed_icons(
        files, "whyChooseServiceIcon_", ensure_list(why_choose.get("services")), WHY_CHOOSE_SERVICE_TEMPLATE
    )
    process = await apply_indexed_icons(files, "appointmentProcessIcon_", ensure_list(process), PROCESS_TEMPLATE)

    hero["backgroundImage"] = await first_image(files, "heroBackgroundImage")
    about_images = [await save_upload(upload) for field, upload in files if field == "aboutImages"]
    if about_images:
        about["images"] = about_images
    appointment["image"] = await first_image(files, "appointmentImage")
    why_choose["image"] = await first_image(files, "whyChooseUsImage")
    download_app["image"] = await first_image(files, "downloadAppImage")

    blocks = {
        "heroSection": hero,
        "featuresSection": features,
        "aboutSection": about,
        "appointmentSection": appointment,
        "whyChooseUsSection": why_choose,
        "downloadAppSection": download_app,
        "appointmentProcess": process,
    }
    homepage = Homepage(
        id=SINGLETON_ID,
        sections=[HomepageSection(name=name, translations={language: blocks[name]}) for name in HOMEPAGE_SECTIONS],
    )
    db.add(homepage)
    db.commit()

    logger.info("Homepage created for language %s", language)
    return homepage_to_dict(_load_homepage(db))


def update_homepage_section(db: Session, section: str, language: Optional[str], translations: Any) -> dict:
    if not language or translations is None:
        raise HTTPException(status_code=400, detail="Missing language or translations data")
    if section not in HOMEPAGE_SECTIONS:
        raise HTTPException(status_code=400, detail="Invalid section name")
    if section not in LIST_SECTIONS and not isinstance(translations, dict):
        raise HTTPException(status_code=400, detail=f"{section} translations must be a JSON object")

    updated = update_section(db, section, language, translations)
    logger.info("Homepage %s updated for language %s", section, language)
    return {"message": f"{section} updated successfully", "data": section_to_dict(updated)}


async def upload_section_image(db: Session, endpoint: str, form: FormData, query_language: Optional[str]) -> dict:
    field_name, section_name, image_key = IMAGE_ENDPOINTS[endpoint]
    language = form_language(form, query_language)
    uploads = [upload for field, upload in form_files(form) if field == field_name]
    if not uploads:
        raise HTTPException(status_code=400, detail=f"No {field_name} uploaded")

    section = _section_or_404(db, section_name)
    current_block = (section.translations or {}).get(language)
    current_block = dict(current_block) if isinstance(current_block, dict) else {}

    if field_name.endswith("Images"):
        value = [await save_upload(u) for u in uploads[:MAX_ABOUT_IMAGES]]
    else:
        value = await save_upload(uploads[0])
    current_block[image_key] = value

    update_section(db, section_name, language, current_block)
    logger.info("%s updated for language %s", field_name, language)
    return {"message": f"{field_name} updated successfully for language: {language}", "imagePath": value}


async def upload_section_icons(db: Session, endpoint: str, form: FormData, query_language: Optional[str]) -> dict:
    prefix, section_name, items_field, template = ICON_ENDPOINTS[endpoint]
    language = form_language(form, query_language)

    section = _section_or_404(db, section_name)
    files = [(field, upload) for field, upload in form_files(form) if field.startswith(prefix)]
    if not files:
        raise HTTPException(status_code=400, detail="No icons uploaded")

    current_block = (section.translations or {}).get(language)
    if items_field:
        block = dict(current_block) if isinstance(current_block, dict) else {}
        items = await apply_indexed_icons(files, prefix, ensure_list(block.get(items_field)), template)
        update_section(db, section_name, language, {**block, items_field: items})
    else:
        items = await apply_indexed_icons(files, prefix, ensure_list(current_block), template)
        update_section(db, section_name, language, items)

    logger.info("Icons for %s updated for language %s", section_name, language)
    return {"message": f"Icons updated successfully for language: {language}", "items": items}


def copy_translations(db: Session, source: Optional[str], target: Optional[str]) -> dict:
    if not source or not target:
        raise HTTPException(status_code=400, detail="Missing sourceLanguage or targetLanguage")
    homepage = _load_homepage(db)
    if not homepage:
        raise HTTPException(status_code=404, detail="Homepage not found")

    for name in HOMEPAGE_SECTIONS:
        sec = homepage.section(name)
        translations = (sec.translations or {}) if sec else {}
        if source in translations:
            update_section(db, name, target, translations[source], replace=True)

    logger.info("Homepage translations copied from %s to %s", source, target)
    return {"message": f"Successfully copied all sections from {source} to {target}"}
