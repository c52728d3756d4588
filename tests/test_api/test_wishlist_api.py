# tests/test_api/test_wishlist_api.py

def test_wishlist_crud(client, sample_user):
    response = client.post("/wishlist", json={
        "name": "The Aeneid",
        "authors": ["Virgil"],
        "series": {"name": "Penguin Classics", "number": 3},
    })
    assert response.status_code == 201
    wish = response.json()
    assert [a["name"] for a in wish["authors"]] == ["Virgil"]
    assert wish["series"] == {"name": "Penguin Classics", "number": 3}

    assert [w["name"] for w in client.get("/wishlist").json()] == ["The Aeneid"]

    assert client.delete(f"/wishlist/{wish['id']}").status_code == 204
    assert client.get("/wishlist").json() == []
    assert client.delete(f"/wishlist/{wish['id']}").status_code == 404

def test_wish_series_position_taken(client, sample_user):
    wish = {"name": "The Aeneid", "series": {"name": "Penguin Classics", "number": 3}}
    client.post("/wishlist", json=wish)

    response = client.post("/wishlist", json={**wish, "name": "Metamorphoses"})
    assert response.status_code == 409

def test_wishes_are_per_user(client, sample_user, other_user):
    client.post("/wishlist", json={"name": "The Aeneid"})
    assert client.get("/wishlist", headers={"Remote-User": "bob"}).json() == []

def test_wish_blank_names(client, sample_user):
    assert client.post("/wishlist", json={"name": "   "}).status_code == 422

    response = client.post("/wishlist", json={"name": "The Aeneid", "series": {"name": "  ", "number": 3}})
    assert response.status_code == 422
    assert client.get("/wishlist").json() == []
