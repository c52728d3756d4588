# tests/test_api/test_series_api.py
import uuid

def test_series_list(client, multiple_books):
    data = client.get("/series").json()

    assert len(data) == 1
    assert data[0]["name"] == "Penguin Classics"
    assert data[0]["owned_count"] == 5
    assert data[0]["complete"] is False

def test_series_books(client, multiple_books, sample_series):
    data = client.get(f"/series/{sample_series.id}").json()
    assert [b["number"] for b in data["books"]] == [1, 2, 3, 4, 5]
    assert data["books"][0]["book"]["title"] == "Volume 1"

def test_series_of_other_user(client, sample_series, other_user):
    response = client.get(f"/series/{sample_series.id}", headers={"Remote-User": "bob"})
    assert response.status_code == 404

def test_edit_series(client, sample_series):
    response = client.post(f"/series/{sample_series.id}/edit",
                           json={"name": "Classics", "ongoing": True, "total_count": 7})

    assert response.status_code == 200
    assert response.json()["name"] == "Classics"
    assert response.json()["ongoing"] is True

def test_edit_series_blank_name(client, sample_series):
    response = client.post(f"/series/{sample_series.id}/edit", json={"name": "   "})
    assert response.status_code == 422
    assert client.get(f"/series/{sample_series.id}").json()["series"]["name"] == "Penguin Classics"

def test_edit_unknown_series(client, sample_user):
    response = client.post(f"/series/{uuid.uuid4()}/edit", json={"name": "Nope"})
    assert response.status_code == 404

def test_ongoing(client, multiple_books, sample_series):
    client.post(f"/series/{sample_series.id}/edit", json={"name": "Penguin Classics", "total_count": 7})

    data = client.get("/ongoing").json()

    assert data["missing"][0]["series"]["name"] == "Penguin Classics"
    assert data["missing"][0]["missing"] == [6, 7]
    assert data["all_owned"] == []

def test_public_ongoing(client, multiple_books, sample_user):
    url = f"/public/{sample_user.id}/ongoing"
    assert client.get(url, headers={"Remote-User": ""}).status_code == 404

    response = client.post("/profile", json={"public_ongoing": True})
    assert response.json()["public_ongoing"] is True

    assert client.get(url, headers={"Remote-User": ""}).status_code == 200

def test_profile(client, sample_user):
    data = client.get("/profile").json()
    assert data["name"] == "alice"
    assert data["public_ongoing"] is False
