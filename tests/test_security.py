from datetime import timedelta

import pytest
from fastapi import HTTPException

from core.security import create_access_token, decode_access_token, hash_password, verify_password


def test_health_check_needs_no_key(anon_client):
    response = anon_client.get("/")
    assert response.status_code == 200
    assert "running" in response.json()["message"]


def test_missing_api_key_is_forbidden(anon_client):
    response = anon_client.get("/api/department/")
    assert response.status_code == 403
    assert response.json()["detail"] == "Access denied. No API key provided."


def test_wrong_api_key_is_unauthorized(anon_client):
    response = anon_client.get("/api/department/", headers={"x-api-key": "nope"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid API key"


def test_valid_api_key_passes(client):
    assert client.get("/api/department/").status_code == 200


def test_password_hash_roundtrip():
    hashed = hash_password("s3cret")
    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("other", hashed)
    assert not verify_password("s3cret", None)


def test_password_longer_than_bcrypt_limit_rejected():
    with pytest.raises(HTTPException) as exc:
        hash_password("x" * 80)
    assert exc.value.status_code == 400


def test_token_carries_user_and_mobile():
    payload = decode_access_token(create_access_token(7, "01700000000"))
    assert payload["userId"] == 7
    assert payload["mobile"] == "01700000000"


def test_expired_token_rejected():
    token = create_access_token(7, "01700000000", expires_delta=timedelta(seconds=-5))
    with pytest.raises(HTTPException) as exc:
        decode_access_token(token)
    assert exc.value.status_code == 403
    assert exc.value.detail == "Invalid or Expired Token!"
