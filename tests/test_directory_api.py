"""
HTTP tests for the listing and user collaborators and health
"""


LISTING = {
    "title": "Balloon wall",
    "description": "Backdrop for photos",
    "eventType": "corporate",
    "colors": ["black", "silver"],
    "images": [],
    "latitude": 51.5,
    "longitude": -0.12,
    "address": "London",
    "creatorId": "u1",
    "creatorName": "studio",
}


def test_create_and_get_listing(client):
    created = client.post("/api/listings", json=LISTING)
    assert created.status_code == 201
    listing_id = created.json()["id"]

    response = client.get(f"/api/listings/{listing_id}")

    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Balloon wall"
    assert data["eventType"] == "corporate"
    assert data["colors"] == ["black", "silver"]


def test_list_listings(client):
    client.post("/api/listings", json=LISTING)
    client.post("/api/listings", json={**LISTING, "title": "Second"})

    response = client.get("/api/listings")

    assert response.status_code == 200
    assert {item["title"] for item in response.json()} == {"Balloon wall", "Second"}


def test_missing_listing_is_404(client):
    response = client.get("/api/listings/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"error": "Listing not found"}


def test_delete_listing(client):
    listing_id = client.post("/api/listings", json=LISTING).json()["id"]

    assert client.delete(f"/api/listings/{listing_id}").status_code == 204
    assert client.get(f"/api/listings/{listing_id}").status_code == 404


def test_create_listing_missing_title_is_400(client):
    body = {key: value for key, value in LISTING.items() if key != "title"}

    response = client.post("/api/listings", json=body)

    assert response.status_code == 400
    assert "title" in response.json()["fields"]


def test_create_and_get_user(client):
    created = client.post("/api/users", json={"username": "carol"})
    assert created.status_code == 201

    response = client.get(f"/api/users/{created.json()['id']}")

    assert response.status_code == 200
    assert response.json()["username"] == "carol"


def test_duplicate_username_is_400(client):
    client.post("/api/users", json={"username": "carol"})

    response = client.post("/api/users", json={"username": "carol"})

    assert response.status_code == 400
    assert response.json()["error"] == "Username already exists"


def test_empty_username_is_400(client):
    response = client.post("/api/users", json={"username": "  "})

    assert response.status_code == 400


def test_missing_user_is_404(client):
    assert client.get("/api/users/nobody").status_code == 404


def test_health_reports_cache_disabled(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["database"] == "up"
    assert data["cache"] == "disabled"
    assert data["status"] == "healthy"
