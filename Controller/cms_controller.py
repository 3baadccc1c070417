# ================== cms_controller.py ==================
# Header, footer and about page: single-row content blocks edited from the dashboard.
from typing import List, Optional

from fastapi import HTTPException, UploadFile
from sqlalchemy.orm import Session

from core.logging_config import get_logger
from core.payloads import parse_json_field
from core.translations import merge_top_level
from core.uploads import has_file, save_optional, save_upload
from model.cms_model import SINGLETON_ID, AboutPage, Footer, Header

logger = get_logger(__name__)


# ---------------- Header ----------------
def header_to_dict(header: Header) -> dict:
    return {
        "id": header.id,
        "translations": header.translations or {},
        "logo": header.logo,
        "contactIcon": header.contact_icon,
        "createdAt": header.created_at,
        "updatedAt": header.updated_at,
    }


def _header_translations(data: Optional[str]) -> dict:
    if not data:
        raise HTTPException(status_code=400, detail="No data provided")
    payload = parse_json_field("data", data)
    translations = payload.get("translations") if isinstance(payload, dict) else None
    if not translations or not isinstance(translations, dict):
        raise HTTPException(status_code=400, detail="Invalid translations data")
    for lang, block in translations.items():
        if not isinstance(block, dict) or not isinstance(block.get("menus"), list):
            raise HTTPException(status_code=400, detail=f"Invalid or missing menus for language: {lang}")
    return translations


def get_header(db: Session) -> dict:
    header = db.query(Header).filter(Header.id == SINGLETON_ID).first()
    if not header:
        raise HTTPException(status_code=404, detail="Header not found")
    return header_to_dict(header)


async def create_header(
    db: Session, data: Optional[str], logo: Optional[UploadFile], contact_icon: Optional[UploadFile]
) -> dict:
    translations = _header_translations(data)
    if db.query(Header).filter(Header.id == SINGLETON_ID).first():
        raise HTTPException(status_code=400, detail="Header already exists. Use PUT to update.")

    header = Header(
        id=SINGLETON_ID,
        translations=translations,
        logo=await save_optional(logo),
        contact_icon=await save_optional(contact_icon),
    )
    db.add(header)
    db.commit()
    db.refresh(header)
    logger.info("Header created")
    return header_to_dict(header)


async def update_header(
    db: Session, data: Optional[str], logo: Optional[UploadFile], contact_icon: Optional[UploadFile]
) -> dict:
    translations = _header_translations(data)
    header = db.query(Header).filter(Header.id == SINGLETON_ID).first()
    if not header:
        raise HTTPException(status_code=404, detail="Header not found")

    header.translations = translations
    if has_file(logo):
        header.logo = await save_upload(logo)
    if has_file(contact_icon):
        header.contact_icon = await save_upload(contact_icon)
    db.commit()
    db.refresh(header)
    logger.info("Header updated")
    return header_to_dict(header)


# ---------------- Footer ----------------
def footer_to_dict(footer: Footer) -> dict:
    return {
        "id": footer.id,
        "translations": footer.translations or {},
        "createdAt": footer.created_at,
        "updatedAt": footer.updated_at,
    }


async def upsert_footer(
    db: Session,
    language: str,
    description: Optional[str],
    contact: Optional[str],
    sections: Optional[str],
    copyright_text: Optional[str],
    social_links: Optional[str],
    list_items: Optional[str],
    footer_logo: Optional[UploadFile],
    contact_logo: Optional[UploadFile],
) -> dict:
    parsed_contact = parse_json_field("contact", contact, {})
    if not isinstance(parsed_contact, dict):
        raise HTTPException(status_code=400, detail="contact must be a JSON object")
    footer_logo_path = await save_optional(footer_logo)
    contact_logo_path = await save_optional(contact_logo)

    block = {
        "footerLogo": footer_logo_path,
        "description": description,
        "contact": {**parsed_contact, "logo": contact_logo_path or parsed_contact.get("logo")},
        "sections": parse_json_field("sections", sections, {}),
        "copyright": copyright_text,
        "socialLinks": parse_json_field("socialLinks", social_links, {}),
        "listItems": parse_json_field("listItems", list_items, []),
    }

    footer = db.query(Footer).filter(Footer.id == SINGLETON_ID).first()
    if footer:
        footer.translations = merge_top_level(footer.translations, {language: block})
        message = "Footer updated"
    else:
        footer = Footer(id=SINGLETON_ID, translations={language: block})
        db.add(footer)
        message = "Footer created"
    db.commit()
    db.refresh(footer)
    logger.info("%s for language %s", message, language)
    return {"success": True, "message": message, "data": footer_to_dict(footer)}


def get_footer(db: Session) -> dict:
    footer = db.query(Footer).filter(Footer.id == SINGLETON_ID).first()
    if not footer:
        raise HTTPException(status_code=404, detail="Footer not found")
    return footer_to_dict(footer)


# ---------------- About page ----------------
def about_to_dict(about: AboutPage) -> dict:
    return {
        "id": about.id,
        "translations": about.translations or {},
        "createdAt": about.created_at,
        "updatedAt": about.updated_at,
    }


async def upsert_about(
    db: Session,
    language: str,
    title: Optional[str],
    subtitle: Optional[str],
    tabs: Optional[str],
    hero_image: Optional[UploadFile],
    callback_image: Optional[UploadFile],
    tab_images: List[UploadFile],
) -> dict:
    parsed_tabs = parse_json_field("tabs", tabs, [])
    if not isinstance(parsed_tabs, list) or not all(isinstance(t, dict) for t in parsed_tabs):
        raise HTTPException(status_code=400, detail="tabs must be a JSON list of objects")

    # tab images are matched to tabs by position
    tab_paths = [await save_upload(f) if has_file(f) else None for f in tab_images]
    parsed_tabs = [
        {**tab, "image": tab_paths[idx] if idx < len(tab_paths) else None}
        for idx, tab in enumerate(parsed_tabs)
    ]

    block = {
        "heroImage": await save_optional(hero_image),
        "callbackImage": await save_optional(callback_image),
        "whoWeAre": {"title": title, "subtitle": subtitle, "tabs": parsed_tabs},
    }

    about = db.query(AboutPage).filter(AboutPage.id == SINGLETON_ID).first()
    if about:
        about.translations = merge_top_level(about.translations, {language: block})
        message = "About page updated"
    else:
        about = AboutPage(id=SINGLETON_ID, translations={language: block})
        db.add(about)
        message = "About page created"
    db.commit()
    db.refresh(about)
    logger.info("%s for language %s", message, language)
    return {"success": True, "message": message, "data": about_to_dict(about)}


def get_about(db: Session) -> dict:
    about = db.query(AboutPage).filter(AboutPage.id == SINGLETON_ID).first()
    return {"success": True, "data": about_to_dict(about) if about else None}
