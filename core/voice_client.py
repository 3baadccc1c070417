# core/voice_client.py
"""Thin async client for the Azure Custom Voice and text-to-speech endpoints."""
import base64
from xml.sax.saxutils import escape, quoteattr

import httpx

from core.config import settings
from core.logging_config import get_logger

logger = get_logger(__name__)

OUTPUT_FORMAT = "audio-16khz-32kbitrate-mono-mp3"
DEFAULT_VOICE = "MyCustomVoice"


class VoiceServiceError(Exception):
    """Azure rejected the request or could not be reached."""


def http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)


def train_endpoint() -> str:
    return (
        f"https://{settings.AZURE_REGION}.customvoice.api.speech.microsoft.com"
        "/api/texttospeech/v3.1-preview1/voices/add"
    )


def tts_endpoint() -> str:
    return f"https://{settings.AZURE_REGION}.tts.speech.microsoft.com/cognitiveservices/v1"


def build_ssml(text: str, voice_id: str = DEFAULT_VOICE) -> str:
    return (
        "<speak version='1.0' xmlns='http://www.w3.org/2001/10/synthesis' xml:lang='en-US'>"
        f"<voice name={quoteattr(voice_id)}>{escape(text)}</voice>"
        "</speak>"
    )


async def train_voice(audio: bytes) -> dict:
    payload = {
        "name": DEFAULT_VOICE,
        "description": "Custom trained voice",
        "locale": "en-US",
        "properties": {"VoiceData": base64.b64encode(audio).decode("ascii")},
    }
    headers = {"Ocp-Apim-Subscription-Key": settings.AZURE_SPEECH_KEY}
    try:
        async with http_client() as client:
            response = await client.post(train_endpoint(), json=payload, headers=headers)
            response.raise_for_status()
            data = response.json() if response.content else {}
    except (httpx.HTTPError, ValueError) as exc:
        raise VoiceServiceError(str(exc)) from exc
    logger.info("Voice training started (%d bytes of audio)", len(audio))
    return data


async def synthesize(text: str, voice_id: str = DEFAULT_VOICE) -> bytes:
    headers = {
        "Ocp-Apim-Subscription-Key": settings.AZURE_SPEECH_KEY,
        "Content-Type": "application/ssml+xml",
        "X-Microsoft-OutputFormat": OUTPUT_FORMAT,
    }
    try:
        async with http_client() as client:
            response = await client.post(tts_endpoint(), content=build_ssml(text, voice_id), headers=headers)
            response.raise_for_status()
    except httpx.HTTPError as exc:
        raise VoiceServiceError(str(exc)) from exc
    return response.content
