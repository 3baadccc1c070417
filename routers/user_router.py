from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from Controller.patient_controller import user_to_dict
from core.logging_config import get_logger
from core.uploads import save_optional
from database import get_db
from model.user_model import User

logger = get_logger(__name__)

router = APIRouter(prefix="/api/user", tags=["Users"])


# Update profile of the user owning ``mobile``
@router.put("/update-profile")
async def update_profile(
    mobile: Optional[str] = Form(None),
    name: Optional[str] = Form(None),
    username: Optional[str] = Form(None),
    profilePhoto: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    if not mobile:
        raise HTTPException(status_code=400, detail="Mobile number is required")

    user = db.query(User).filter(User.mobile == mobile).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    photo = await save_optional(profilePhoto, subdir="profiles")
    if name:
        user.name = name
    if username:
        user.username = username
    if photo:
        user.profile_photo = photo
    db.commit()
    db.refresh(user)

    logger.info("Profile updated for user %s", user.id)
    return {"message": "Profile updated successfully", "user": user_to_dict(user)}
