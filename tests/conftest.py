import io
import os
import tempfile

# Settings are read at import time, so the environment goes first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["API_KEY"] = "test-api-key"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="hospital-uploads-")
os.environ["PUBLIC_BASE_URL"] = "http://testserver"
os.environ["FRONTEND_URL"] = "http://frontend.test"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from PIL import Image  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from core import mailer, sms_client, voice_client  # noqa: E402
from database import Base, get_db  # noqa: E402
from main import app  # noqa: E402

API_KEY = "test-api-key"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def fresh_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    with TestClient(app, headers={"x-api-key": API_KEY}) as c:
        yield c


@pytest.fixture
def anon_client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), color=(200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def sent_sms(monkeypatch):
    sent = []

    async def fake_send_sms(mobile_number, message):
        sent.append((mobile_number, message))
        return {"statusCode": "200"}

    monkeypatch.setattr(sms_client, "send_sms", fake_send_sms)
    return sent


@pytest.fixture
def sent_mail(monkeypatch):
    sent = []

    async def fake_send_email(recipients, subject, html):
        sent.append({"to": recipients, "subject": subject, "html": html})

    monkeypatch.setattr(mailer, "send_email", fake_send_email)
    return sent


@pytest.fixture
def azure(monkeypatch):
    calls = {"train": [], "synthesize": []}

    async def fake_train(audio):
        calls["train"].append(audio)
        return {"id": "voice-1", "status": "NotStarted"}

    async def fake_synthesize(text, voice_id=voice_client.DEFAULT_VOICE):
        calls["synthesize"].append((text, voice_id))
        return b"ID3fake-mp3"

    monkeypatch.setattr(voice_client, "train_voice", fake_train)
    monkeypatch.setattr(voice_client, "synthesize", fake_synthesize)
    return calls
