# tests/test_api/test_books_api.py
import uuid
from librarian.sa.models import User

def test_requires_user_header(client):
    response = client.get("/", headers={"Remote-User": ""})
    assert response.status_code == 401

def test_unknown_user_is_created(client, db_session):
    response = client.get("/", headers={"Remote-User": "carol"})

    assert response.status_code == 200
    assert response.json()["total"] == 0
    assert db_session.query(User).filter_by(name="carol").count() == 1

def test_list_books(client, multiple_books):
    response = client.get("/", params={"size": 2, "page": 2})

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 5
    assert [b["title"] for b in data["items"]] == ["Volume 3", "Volume 4"]
    assert data["items"][0]["authors"][0]["name"] == "Homer"

def test_search_books(client, multiple_books):
    data = client.get("/", params={"query": "volume 5"}).json()
    assert [b["title"] for b in data["items"]] == ["Volume 5"]

def test_other_users_books_are_hidden(client, sample_book, other_user):
    assert client.get("/", headers={"Remote-User": "bob"}).json()["total"] == 0
    response = client.get(f"/book/{sample_book.id}", headers={"Remote-User": "bob"})
    assert response.status_code == 404

def test_get_book(client, sample_book_with_relationships):
    response = client.get(f"/book/{sample_book_with_relationships.id}")

    assert response.status_code == 200
    data = response.json()
    assert data["isbn"] == "9780140449136"
    assert [t["name"] for t in data["tags"]] == ["Epic"]
    assert data["series"] == {"name": "Penguin Classics", "number": 1}
    assert data["has_cover"] is False

def test_get_unknown_book(client, sample_user):
    assert client.get(f"/book/{uuid.uuid4()}").status_code == 404

def test_edit_book(client, odyssey_form):
    book_id = client.post("/add", json=odyssey_form).json()["id"]

    form = client.get(f"/book/{book_id}/edit").json()
    assert form["series"] == {"name": "Penguin Classics", "number": 1}

    form["read"] = True
    form["tags"] = ["Epic", "Classic"]
    form["series"] = None
    response = client.post(f"/book/{book_id}/edit", json=form)

    assert response.status_code == 200
    data = response.json()
    assert data["read"] is True
    assert sorted(t["name"] for t in data["tags"]) == ["Classic", "Epic"]
    assert data["series"] is None

def test_cover_image(client, odyssey_form, cover_b64):
    odyssey_form["cover"] = cover_b64
    book = client.post("/add", json=odyssey_form).json()
    assert book["has_cover"] is True

    response = client.get(f"/images/{book['id']}")
    assert response.status_code == 200
    assert response.headers["content-type"] == "image/jpeg"

def test_missing_cover_image(client, sample_book):
    assert client.get(f"/images/{sample_book.id}").status_code == 404

def test_author_page(client, multiple_books, sample_author):
    response = client.get(f"/author/{sample_author.id}")

    assert response.status_code == 200
    data = response.json()
    assert data["author"]["name"] == "Homer"
    assert [b["title"] for b in data["books"]] == [f"Volume {i}" for i in range(1, 6)]

def test_author_without_books_for_user(client, multiple_books, sample_author, other_user):
    response = client.get(f"/author/{sample_author.id}", headers={"Remote-User": "bob"})
    assert response.status_code == 404

def test_unread(client, multiple_books, sample_user, db_session):
    from librarian.sa.models import Book
    db_session.add(Book(owner_id=sample_user.id, isbn="9780140268867", title="The Iliad", summary=""))
    db_session.commit()

    groups = client.get("/unread").json()["groups"]

    assert groups[0]["series"] is None
    assert [b["title"] for b in groups[0]["books"]] == ["The Iliad"]
    assert groups[1]["series"]["name"] == "Penguin Classics"
    assert [b["title"] for b in groups[1]["books"]] == ["Volume 3", "Volume 4", "Volume 5"]
