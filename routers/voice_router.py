import time
from typing import Optional

from fastapi import APIRouter, File, HTTPException, UploadFile
from pydantic import BaseModel, ConfigDict, Field

from core import voice_client
from core.config import settings
from core.logging_config import get_logger
from core.uploads import has_file, save_bytes, unique_filename

logger = get_logger(__name__)

router = APIRouter(prefix="/api/voice", tags=["Voice"])


class GenerateVoiceRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = None
    voice_id: str = Field(default=voice_client.DEFAULT_VOICE, alias="voiceId")


# -------------------------------
# Train a custom voice from a sample
# -------------------------------
@router.post("/train-voice")
async def train_voice(file: Optional[UploadFile] = File(None)):
    if not has_file(file):
        raise HTTPException(status_code=400, detail="No file uploaded")

    audio = await file.read()
    await save_bytes(audio, unique_filename(file.filename), subdir="voices")
    try:
        data = await voice_client.train_voice(audio)
    except voice_client.VoiceServiceError as exc:
        logger.error("Error training voice: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to train voice")

    return {"message": "Voice training started successfully!", "data": data}


# -------------------------------
# Text to speech with the trained voice
# -------------------------------
@router.post("/generate-voice")
async def generate_voice(request: GenerateVoiceRequest):
    if not request.text:
        raise HTTPException(status_code=400, detail="No text provided")

    try:
        audio = await voice_client.synthesize(request.text, request.voice_id)
    except voice_client.VoiceServiceError as exc:
        logger.error("Error generating voice: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to generate voice")

    path = await save_bytes(audio, f"output_{int(time.time() * 1000)}.mp3")
    return {"message": "Voice generated successfully!", "audioUrl": f"{settings.PUBLIC_BASE_URL.rstrip('/')}{path}"}
