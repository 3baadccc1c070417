import asyncio
import io
import json

from fastapi import UploadFile

from Controller import cms_controller

HEADER_DATA = {"translations": {"en": {"menus": [{"label": "Home", "url": "/"}]}, "bn": {"menus": []}}}


# ---------------- Header ----------------
def test_header_create_once_then_update(client, png_bytes):
    assert client.get("/api/header/").status_code == 404
    assert client.put("/api/header/", data={"data": json.dumps(HEADER_DATA)}).status_code == 404

    created = client.post(
        "/api/header/add",
        data={"data": json.dumps(HEADER_DATA)},
        files={"logo": ("logo.png", png_bytes, "image/png")},
    )
    assert created.status_code == 201
    assert created.json()["id"] == 1
    assert created.json()["logo"].startswith("/uploads/")

    again = client.post("/api/header/add", data={"data": json.dumps(HEADER_DATA)})
    assert again.status_code == 400
    assert again.json()["detail"] == "Header already exists. Use PUT to update."

    new_data = {"translations": {"en": {"menus": [{"label": "Doctors", "url": "/doctors"}]}}}
    updated = client.put("/api/header/", data={"data": json.dumps(new_data)}).json()
    assert updated["translations"] == new_data["translations"]
    assert updated["logo"] == created.json()["logo"]


def test_header_validation(client):
    assert client.post("/api/header/add").json()["detail"] == "No data provided"
    assert (
        client.post("/api/header/add", data={"data": json.dumps({"translations": []})}).json()["detail"]
        == "Invalid translations data"
    )
    missing_menus = client.post("/api/header/add", data={"data": json.dumps({"translations": {"bn": {}}})})
    assert missing_menus.status_code == 400
    assert missing_menus.json()["detail"] == "Invalid or missing menus for language: bn"


# ---------------- Footer ----------------
def test_footer_upsert_per_language(client):
    assert client.get("/api/footer/").status_code == 404

    created = client.post(
        "/api/footer/",
        data={
            "language": "en",
            "description": "Caring since 1990",
            "contact": json.dumps({"phone": "123"}),
            "listItems": json.dumps(["a", "b"]),
        },
    ).json()
    assert created["message"] == "Footer created"
    assert created["data"]["translations"]["en"]["contact"] == {"phone": "123", "logo": None}

    updated = client.post("/api/footer/", data={"language": "bn", "description": "বাংলা"}).json()
    assert updated["message"] == "Footer updated"
    translations = client.get("/api/footer/").json()["translations"]
    assert set(translations) == {"en", "bn"}
    assert translations["en"]["listItems"] == ["a", "b"]


def test_footer_rejects_bad_json(client):
    response = client.post("/api/footer/", data={"sections": "{nope"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid JSON in sections field"


# ---------------- About ----------------
def test_about_tabs_get_images_by_position(client, png_bytes):
    assert client.get("/api/about/").json() == {"success": True, "data": None}

    tabs = [{"title": "Mission"}, {"title": "Vision"}]
    response = client.post(
        "/api/about/",
        data={"language": "en", "title": "Who we are", "tabs": json.dumps(tabs)},
        files=[("tabImages", ("m.png", png_bytes, "image/png"))],
    )
    assert response.status_code == 200
    block = response.json()["data"]["translations"]["en"]
    assert block["whoWeAre"]["title"] == "Who we are"
    assert block["whoWeAre"]["tabs"][0]["image"].startswith("/uploads/")
    assert block["whoWeAre"]["tabs"][1]["image"] is None



def test_about_empty_tab_image_keeps_later_positions(db_session, png_bytes):
    tabs = [{"title": "Mission"}, {"title": "Vision"}]
    uploads = [UploadFile(io.BytesIO(b""), filename=""), UploadFile(io.BytesIO(png_bytes), filename="v.png")]

    result = asyncio.run(
        cms_controller.upsert_about(db_session, "en", "Who we are", None, json.dumps(tabs), None, None, uploads)
    )

    saved = result["data"]["translations"]["en"]["whoWeAre"]["tabs"]
    assert saved[0]["image"] is None
    assert saved[1]["image"].startswith("/uploads/")


def test_about_tabs_must_be_objects(client):
    response = client.post("/api/about/", data={"tabs": json.dumps(["Mission"])})
    assert response.status_code == 400


# ---------------- Homepage ----------------
def create_homepage(client, png_bytes, language="en"):
    return client.post(
        "/api/home/",
        params={"language": language},
        data={
            "heroSection": json.dumps({"title": "Welcome"}),
            "featuresSection": json.dumps([{"title": "24/7", "subtitle": "Open"}]),
            "aboutSection": json.dumps({"title": "About", "services": [{"serviceTitle": "Lab"}]}),
            "appointmentProcess": json.dumps([{"title": "Book"}]),
        },
        files=[
            ("heroBackgroundImage", ("hero.png", png_bytes, "image/png")),
            ("featureIcon_0", ("f0.png", png_bytes, "image/png")),
            ("serviceIcon_1", ("s1.png", png_bytes, "image/png")),
        ],
    )


def test_homepage_create(client, png_bytes):
    assert client.get("/api/home/").status_code == 404

    response = create_homepage(client, png_bytes)
    assert response.status_code == 201
    home = response.json()

    hero = home["heroSection"]["translations"]["en"]
    assert hero["title"] == "Welcome"
    assert hero["backgroundImage"].startswith("/uploads/")

    features = home["featuresSection"]["translations"]["en"]
    assert features[0]["icon"].startswith("/uploads/")

    services = home["aboutSection"]["translations"]["en"]["services"]
    assert len(services) == 2
    assert services[0] == {"serviceTitle": "Lab"}
    assert services[1]["icon"].startswith("/uploads/")

    assert home["appointmentSection"]["translations"]["en"]["image"] == ""

    again = create_homepage(client, png_bytes)
    assert again.status_code == 400
    assert again.json()["detail"] == "Homepage already exists. Use PUT to update."


def test_homepage_section_update(client, png_bytes):
    create_homepage(client, png_bytes)

    merged = client.put("/api/home/heroSection", json={"language": "en", "translations": {"subtitle": "Hi"}})
    hero = merged.json()["data"]["translations"]["en"]
    assert hero["title"] == "Welcome" and hero["subtitle"] == "Hi"

    replaced = client.put(
        "/api/home/featuresSection", json={"language": "en", "translations": [{"title": "Only"}]}
    ).json()
    assert replaced["data"]["translations"]["en"] == [{"title": "Only"}]

    assert client.put("/api/home/nope", json={"language": "en", "translations": {}}).json()["detail"] == (
        "Invalid section name"
    )
    assert client.put("/api/home/heroSection", json={"translations": {}}).json()["detail"] == (
        "Missing language or translations data"
    )


def test_homepage_image_and_icon_uploads(client, png_bytes):
    create_homepage(client, png_bytes)

    image = client.post(
        "/api/home/uploadAppointmentImage",
        params={"language": "bn"},
        files={"appointmentImage": ("a.png", png_bytes, "image/png")},
    ).json()
    assert image["imagePath"].startswith("/uploads/")
    section = client.get("/api/home/").json()["appointmentSection"]["translations"]
    assert section["bn"]["image"] == image["imagePath"]

    about = client.post(
        "/api/home/uploadAboutImages",
        files=[("aboutImages", (f"{i}.png", png_bytes, "image/png")) for i in range(5)],
    ).json()
    assert len(about["imagePath"]) == 4

    icons = client.post(
        "/api/home/uploadAppointmentProcessIcons",
        files={"appointmentProcessIcon_2": ("p.png", png_bytes, "image/png")},
    ).json()
    assert len(icons["items"]) == 3
    assert icons["items"][0]["title"] == "Book"
    assert icons["items"][2]["icon"].startswith("/uploads/")

    missing = client.post("/api/home/uploadHeroImage", data={"language": "en"})
    assert missing.status_code == 400
    assert missing.json()["detail"] == "No heroBackgroundImage uploaded"


def test_homepage_copy_translations(client, png_bytes):
    create_homepage(client, png_bytes)

    copied = client.post("/api/home/copy-translations", json={"sourceLanguage": "en", "targetLanguage": "bn"})
    assert copied.json()["message"] == "Successfully copied all sections from en to bn"

    home = client.get("/api/home/").json()
    assert home["heroSection"]["translations"]["bn"] == home["heroSection"]["translations"]["en"]
    assert client.post("/api/home/copy-translations", json={"sourceLanguage": "en"}).status_code == 400
