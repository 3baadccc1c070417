import json


# ---------------- Departments ----------------
def test_department_crud_and_merge(client):
    created = client.post(
        "/api/department/",
        json={"translations": {"en": {"name": "Cardio", "description": "Heart"}, "bn": {"name": "হৃদরোগ"}}},
    )
    assert created.status_code == 201
    dep_id = created.json()["newDepartment"]["id"]

    updated = client.put(f"/api/department/{dep_id}", json={"translations": {"en": {"name": "Cardiology"}}})
    assert updated.json()["department"]["translations"]["en"] == {"name": "Cardiology", "description": "Heart"}

    assert client.get(f"/api/department/{dep_id}", params={"lang": "bn"}).json()["translations"] == {
        "name": "হৃদরোগ"
    }
    listed = client.get("/api/department/", params={"lang": "fr"}).json()
    assert listed[0]["translations"]["name"] == "Cardiology"

    assert client.delete(f"/api/department/{dep_id}").json()["message"] == "Department deleted"
    assert client.get(f"/api/department/{dep_id}").status_code == 404


def test_department_requires_object(client):
    response = client.post("/api/department/", json={"translations": "Cardio"})
    assert response.status_code == 400
    assert response.json()["detail"] == "translations must be a valid JSON object."


# ---------------- Categories ----------------
def test_category_update_is_top_level_merge(client):
    cat = client.post(
        "/api/category/", json={"translations": {"en": {"name": "News", "note": "x"}, "bn": {"name": "খবর"}}}
    ).json()["category"]

    updated = client.put(
        f"/api/category/{cat['id']}", json={"translations": json.dumps({"en": {"name": "Updates"}})}
    ).json()["category"]
    assert updated["translations"] == {"en": {"name": "Updates"}, "bn": {"name": "খবর"}}

    assert client.get(f"/api/category/{cat['id']}", params={"lang": "bn"}).json()["translations"] == {
        "name": "খবর"
    }
    assert client.post("/api/category/", json={"translations": None}).json()["detail"] == "Invalid translations format"
    assert client.delete(f"/api/category/{cat['id']}").status_code == 200
    assert client.delete(f"/api/category/{cat['id']}").status_code == 404


# ---------------- Blogs ----------------
def test_blog_lifecycle_and_slug_lookup(client, png_bytes):
    translations = {"en": {"title": "Healthy heart", "slug": "healthy-heart"}, "bn": {"slug": "sustho-hridoy"}}
    created = client.post(
        "/api/blogs/add",
        data={"translations": json.dumps(translations)},
        files={"image": ("cover.png", png_bytes, "image/png")},
    )
    assert created.status_code == 201
    blog = created.json()["blog"]
    assert blog["image"].startswith("/uploads/")

    assert client.get("/api/blogs/slug/sustho-hridoy").json()["id"] == blog["id"]
    missing = client.get("/api/blogs/slug/unknown")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Blog not found by slug"

    edited = client.put(
        f"/api/blogs/edit/{blog['id']}", data={"translations": json.dumps({"en": {"title": "New"}})}
    ).json()["blog"]
    assert edited["translations"] == {"en": {"title": "New"}}
    assert edited["image"] == blog["image"]

    deleted = client.delete(f"/api/blogs/delete/{blog['id']}").json()
    assert deleted["blog"]["id"] == blog["id"]
    assert client.get(f"/api/blogs/{blog['id']}").status_code == 404


def test_blogs_listed_newest_first(client):
    for title in ("one", "two"):
        client.post("/api/blogs/add", data={"translations": json.dumps({"en": {"title": title}})})
    titles = [b["translations"]["en"]["title"] for b in client.get("/api/blogs/").json()]
    assert titles == ["two", "one"]


# ---------------- Pages ----------------
def test_page_requires_fields(client):
    response = client.post("/api/page/add", json={"name": "About"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Name, Slug, and Translations are required"


def test_page_pagination_and_search(client):
    for i in range(3):
        client.post(
            "/api/page/add",
            json={"name": f"Page {i}", "slug": f"page-{i}", "translations": {"en": {"title": str(i)}}},
        )
    client.post("/api/page/add", json={"name": "Privacy", "slug": "privacy", "translations": {"en": {}}})

    first = client.get("/api/page/", params={"page": 1, "limit": 3}).json()
    assert first["totalPages"] == 2
    assert first["currentPage"] == 1
    assert len(first["pages"]) == 3

    found = client.get("/api/page/", params={"search": "priv"}).json()
    assert [p["slug"] for p in found["pages"]] == ["privacy"]


def test_page_partial_update_and_delete(client):
    page = client.post(
        "/api/page/add", json={"name": "Terms", "slug": "terms", "translations": {"en": {"t": 1}}}
    ).json()["page"]
    updated = client.put(f"/api/page/edit/{page['id']}", json={"name": "Terms of use"}).json()["page"]
    assert updated["name"] == "Terms of use"
    assert updated["slug"] == "terms"

    duplicate = client.post("/api/page/add", json={"name": "X", "slug": "terms", "translations": {"en": {}}})
    assert duplicate.status_code == 400

    assert client.delete(f"/api/page/delete/{page['id']}").json()["page"]["slug"] == "terms"
    assert client.get(f"/api/page/{page['id']}").status_code == 404


# ---------------- Reviews ----------------
def test_review_crud(client):
    review = client.post(
        "/api/reviews/", json={"name": "Rina", "role": "Patient", "rating": 4.5, "reviewText": "Great care"}
    ).json()
    assert review["reviewText"] == "Great care"

    updated = client.put(f"/api/reviews/{review['id']}", json={"rating": 5}).json()
    assert updated["rating"] == 5
    assert updated["name"] == "Rina"

    assert len(client.get("/api/reviews/").json()) == 1
    assert client.delete(f"/api/reviews/{review['id']}").status_code == 200
    assert client.put(f"/api/reviews/{review['id']}", json={"rating": 1}).status_code == 404
