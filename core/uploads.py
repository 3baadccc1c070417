# core/uploads.py
import io
import uuid
from pathlib import Path
from typing import Iterable, Optional

import aiofiles
from fastapi import HTTPException, UploadFile
from PIL import Image, UnidentifiedImageError

from core.config import settings
from core.logging_config import get_logger

logger = get_logger(__name__)

UPLOAD_URL_PREFIX = "/uploads"
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png")
PATIENT_IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif")


# ---------------- Upload folder ----------------
def upload_root() -> Path:
    root = Path(settings.UPLOAD_DIR)
    root.mkdir(parents=True, exist_ok=True)
    return root


def has_file(file: Optional[UploadFile]) -> bool:
    return file is not None and bool(file.filename)


def unique_filename(original: str) -> str:
    return f"{uuid.uuid4().hex}_{Path(original).name}"


# ---------------- Validation ----------------
def validate_image(filename: str, content: bytes, allowed_extensions: Iterable[str]):
    """Raise 400 unless the upload has an allowed extension and really is an image."""
    allowed = tuple(allowed_extensions)
    if not filename.lower().endswith(allowed):
        names = ", ".join(ext.lstrip(".").upper() for ext in allowed)
        raise HTTPException(status_code=400, detail=f"Only images ({names}) are allowed")
    try:
        img = Image.open(io.BytesIO(content))
        img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError):
        raise HTTPException(status_code=400, detail="File is not a valid image")


def check_size(filename: str, content: bytes, max_bytes: Optional[int] = None):
    limit = max_bytes or settings.MAX_UPLOAD_BYTES
    if len(content) > limit:
        raise HTTPException(
            status_code=400,
            detail=f"File {filename} is too large, max {limit // (1024 * 1024)} MB",
        )


# ---------------- Saving ----------------
async def save_bytes(content: bytes, filename: str, subdir: str = "") -> str:
    """Write ``content`` below the upload folder and return its public path."""
    folder = upload_root() / subdir if subdir else upload_root()
    folder.mkdir(parents=True, exist_ok=True)
    async with aiofiles.open(folder / filename, "wb") as out_file:
        await out_file.write(content)
    public = f"{UPLOAD_URL_PREFIX}/{subdir}/{filename}" if subdir else f"{UPLOAD_URL_PREFIX}/{filename}"
    logger.info("Stored upload %s (%d bytes)", public, len(content))
    return public


async def save_upload(
    file: UploadFile,
    subdir: str = "",
    allowed_extensions: Optional[Iterable[str]] = IMAGE_EXTENSIONS,
    max_bytes: Optional[int] = None,
) -> str:
    limit = max_bytes or settings.MAX_UPLOAD_BYTES
    # one byte past the limit is enough to reject the upload
    content = await file.read(limit + 1)
    check_size(file.filename, content, limit)
    if allowed_extensions:
        validate_image(file.filename, content, allowed_extensions)
    return await save_bytes(content, unique_filename(file.filename), subdir)


async def save_optional(file: Optional[UploadFile], **kwargs) -> Optional[str]:
    if not has_file(file):
        return None
    return await save_upload(file, **kwargs)
