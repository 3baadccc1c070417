import json

import pytest

from Controller.appointment_controller import normalize_blood_group
from model.patient_model import Patient
from model.user_model import User


@pytest.fixture
def doctor(client):
    data = {
        "email": "doc@h.com",
        "translations": {"en": {"name": "Dr Who"}},
        "schedule": [{"day": "Monday", "startTime": "09:00", "endTime": "12:00"}],
    }
    response = client.post("/api/doctor/add", data={"data": json.dumps(data)})
    return response.json()["doctor"]


def booking(doctor, **extra):
    body = {
        "doctorId": doctor["id"],
        "doctorName": "Dr Who",
        "patientName": "Karim",
        "mobileNumber": "01711111111",
        "appointmentDate": "2025-03-01",
    }
    body.update(extra)
    return body


# ---------------- Patients ----------------
def test_add_patient_creates_user(client, png_bytes):
    response = client.post(
        "/api/patient/add",
        data={"name": "Rahim", "phoneNumber": "01800000000", "dateOfBirth": "1990-05-01", "bloodGroup": "A+"},
        files={"image": ("face.gif", png_bytes, "image/gif")},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "success"
    assert body["userCreated"] is True
    assert body["patient"]["user"]["role"] == "patient"
    assert body["patient"]["image"].startswith("/uploads/patients/")
    assert body["patient"]["dateOfBirth"] == "1990-05-01"


def test_add_patient_links_existing_user(client, db_session):
    db_session.add(User(name="Existing", mobile="01900000000"))
    db_session.commit()

    body = client.post("/api/patient/add", data={"name": "Existing", "phoneNumber": "01900000000"}).json()
    assert body["userCreated"] is False
    assert body["patient"]["user"]["name"] == "Existing"


def test_add_patient_validation(client):
    assert client.post("/api/patient/add", data={"name": "X"}).json()["detail"] == (
        "Name and phone number are required"
    )

    client.post("/api/patient/add", data={"name": "A", "phoneNumber": "0155"})
    duplicate = client.post("/api/patient/add", data={"name": "B", "phoneNumber": "0155"})
    assert duplicate.status_code == 400
    detail = duplicate.json()["detail"]
    assert detail["existingPatient"]["name"] == "A"

    bad_date = client.post("/api/patient/add", data={"name": "C", "phoneNumber": "0166", "dateOfBirth": "May"})
    assert bad_date.status_code == 400


def test_list_and_get_patients(client):
    first = client.post("/api/patient/add", data={"name": "One", "phoneNumber": "1"}).json()["patient"]
    client.post("/api/patient/add", data={"name": "Two", "phoneNumber": "2"})

    names = [p["name"] for p in client.get("/api/patient/").json()]
    assert names == ["Two", "One"]
    assert client.get(f"/api/patient/{first['id']}").json()["name"] == "One"
    assert client.get("/api/patient/999").status_code == 404


# ---------------- Appointments ----------------
def test_normalize_blood_group():
    assert normalize_blood_group("a+") == "A_POSITIVE"
    assert normalize_blood_group("O-") == "O_NEGATIVE"
    assert normalize_blood_group("") is None


def test_admin_booking_creates_user_and_patient(client, doctor, db_session):
    response = client.post(
        "/api/appointment/add",
        json=booking(doctor, bloodGroup="B+", paymentMethod="bkash", consultationType="video_call", vat=15),
    )
    assert response.status_code == 201
    app = response.json()["appointment"]
    assert app["status"] == "Pending"
    assert app["bloodGroup"] == "B_POSITIVE"
    assert app["paymentMethod"] == "BKASH"
    assert app["consultationType"] == "VIDEO_CALL"
    assert app["doctor"]["slug"] == "dr-who"
    assert app["patient"]["phoneNumber"] == "01711111111"

    user = db_session.query(User).filter(User.mobile == "01711111111").one()
    assert user.role == "patient"

    # a second booking reuses the same patient
    again = client.post("/api/appointment/add", json=booking(doctor)).json()["appointment"]
    assert again["patientId"] == app["patientId"]
    assert db_session.query(Patient).count() == 1


def test_admin_booking_validation(client, doctor):
    missing = client.post("/api/appointment/add", json=booking(doctor, appointmentDate=None))
    assert missing.status_code == 400
    assert "appointment date are required" in missing.json()["detail"]

    unknown = client.post("/api/appointment/add", json=booking(doctor, doctorId=999))
    assert unknown.status_code == 400
    assert unknown.json()["detail"] == "Doctor not found"


def test_patient_site_booking_needs_no_date(client, doctor):
    schedule_id = doctor["schedule"][0]["id"]
    body = booking(doctor, appointmentDate=None, isNewPatient=True, scheduleId=schedule_id)
    response = client.post("/api/patient/appointment/add", json=body)
    assert response.status_code == 201
    assert response.json()["appointment"]["appointmentDate"] is None

    wrong_schedule = client.post("/api/patient/appointment/add", json=booking(doctor, scheduleId=12345))
    assert wrong_schedule.status_code == 400


def test_edit_and_delete_appointment(client, doctor):
    app = client.post("/api/appointment/add", json=booking(doctor, reason="Checkup")).json()["appointment"]

    edited = client.put(f"/api/appointment/edit/{app['id']}", json={"status": "Confirmed", "bloodGroup": "O-"})
    assert edited.status_code == 200
    body = edited.json()["appointment"]
    assert body["status"] == "Confirmed"
    assert body["bloodGroup"] == "O_NEGATIVE"
    assert body["reason"] == "Checkup"

    # status stays when not sent
    kept = client.put(f"/api/appointment/edit/{app['id']}", json={"reason": "Follow-up"}).json()["appointment"]
    assert kept["status"] == "Confirmed"

    listed = client.get("/api/appointment/").json()["appointments"]
    assert [a["id"] for a in listed] == [app["id"]]

    assert client.delete(f"/api/appointment/delete/{app['id']}").status_code == 200
    assert client.get(f"/api/appointment/{app['id']}").status_code == 404
    assert client.put(f"/api/appointment/edit/{app['id']}", json={}).status_code == 404
