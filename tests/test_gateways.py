import asyncio
import base64
import json

import httpx
import pytest

from core import sms_client, voice_client
from core.config import settings


def route_to(monkeypatch, module, handler):
    """Send the module's outgoing requests to ``handler`` and record them."""
    seen = []

    def record(request):
        seen.append(request)
        return handler(request)

    monkeypatch.setattr(module, "http_client", lambda: httpx.AsyncClient(transport=httpx.MockTransport(record)))
    return seen


# ---------------- MiM SMS ----------------
def test_send_sms_posts_gateway_payload(monkeypatch):
    monkeypatch.setattr(settings, "MIM_SMS_USERNAME", "hospital")
    monkeypatch.setattr(settings, "MIM_SMS_APIKEY", "mim-key")
    monkeypatch.setattr(settings, "MIM_SMS_SENDER_NAME", "HOSP")
    seen = route_to(
        monkeypatch, sms_client, lambda request: httpx.Response(200, json={"statusCode": "200", "trxnId": "t1"})
    )

    data = asyncio.run(sms_client.send_sms("01711111111", "Your code is 123456"))

    assert data["trxnId"] == "t1"
    assert str(seen[0].url) == settings.MIM_SMS_URL
    assert json.loads(seen[0].content) == {
        "UserName": "hospital",
        "Apikey": "mim-key",
        "MobileNumber": "01711111111",
        "CampaignId": "null",
        "SenderName": "HOSP",
        "TransactionType": "T",
        "Message": "Your code is 123456",
    }


def test_send_sms_rejected_status_code(monkeypatch):
    route_to(
        monkeypatch,
        sms_client,
        lambda request: httpx.Response(200, json={"statusCode": "208", "responseResult": "Invalid sender"}),
    )
    with pytest.raises(sms_client.SmsError, match="MiM SMS Error: Invalid sender"):
        asyncio.run(sms_client.send_sms("01711111111", "hi"))


@pytest.mark.parametrize(
    "response",
    [httpx.Response(503, text="unavailable"), httpx.Response(200, content=b"<html>not json</html>")],
)
def test_send_sms_bad_response(monkeypatch, response):
    route_to(monkeypatch, sms_client, lambda request: response)
    with pytest.raises(sms_client.SmsError):
        asyncio.run(sms_client.send_sms("01711111111", "hi"))


def test_send_sms_unreachable(monkeypatch):
    def down(request):
        raise httpx.ConnectError("connection refused", request=request)

    route_to(monkeypatch, sms_client, down)
    with pytest.raises(sms_client.SmsError):
        asyncio.run(sms_client.send_sms("01711111111", "hi"))


# ---------------- Azure voice ----------------
def test_train_voice_sends_base64_sample(monkeypatch):
    monkeypatch.setattr(settings, "AZURE_SPEECH_KEY", "azure-key")
    seen = route_to(monkeypatch, voice_client, lambda request: httpx.Response(202, json={"id": "voice-9"}))

    data = asyncio.run(voice_client.train_voice(b"RIFFdata"))

    assert data == {"id": "voice-9"}
    request = seen[0]
    assert str(request.url) == voice_client.train_endpoint()
    assert request.headers["Ocp-Apim-Subscription-Key"] == "azure-key"
    body = json.loads(request.content)
    assert body["name"] == voice_client.DEFAULT_VOICE
    assert base64.b64decode(body["properties"]["VoiceData"]) == b"RIFFdata"


@pytest.mark.parametrize(
    "response",
    [httpx.Response(401, text="Unauthorized"), httpx.Response(200, content=b"<html>not json</html>")],
)
def test_train_voice_bad_response(monkeypatch, response):
    route_to(monkeypatch, voice_client, lambda request: response)
    with pytest.raises(voice_client.VoiceServiceError):
        asyncio.run(voice_client.train_voice(b"RIFFdata"))


def test_synthesize_sends_ssml(monkeypatch):
    monkeypatch.setattr(settings, "AZURE_SPEECH_KEY", "azure-key")
    seen = route_to(monkeypatch, voice_client, lambda request: httpx.Response(200, content=b"ID3audio"))

    audio = asyncio.run(voice_client.synthesize("Hello & welcome", "DoctorVoice"))

    assert audio == b"ID3audio"
    request = seen[0]
    assert str(request.url) == voice_client.tts_endpoint()
    assert request.headers["Content-Type"] == "application/ssml+xml"
    assert request.headers["X-Microsoft-OutputFormat"] == voice_client.OUTPUT_FORMAT
    assert request.headers["Ocp-Apim-Subscription-Key"] == "azure-key"
    assert request.content.decode() == voice_client.build_ssml("Hello & welcome", "DoctorVoice")


def test_synthesize_rejected(monkeypatch):
    route_to(monkeypatch, voice_client, lambda request: httpx.Response(401, text="Unauthorized"))
    with pytest.raises(voice_client.VoiceServiceError):
        asyncio.run(voice_client.synthesize("Hello"))
