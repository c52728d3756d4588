# tests/test_sa/test_repositories/test_book_repository.py
import pytest
from librarian.sa.repositories.book import BookRepository
from librarian.sa.models import Book

@pytest.fixture
def book_repo(db_session):
    return BookRepository(db_session)

def test_get_for_owner(book_repo, sample_book_with_relationships, sample_user, other_user):
    book = book_repo.get_for_owner(sample_book_with_relationships.id, sample_user.id)
    assert book.title == "The Odyssey"
    assert book_repo.get_for_owner(sample_book_with_relationships.id, other_user.id) is None

def test_has_isbn(book_repo, sample_book, sample_user, other_user):
    assert book_repo.has_isbn(sample_user.id, "9780140449136")
    assert not book_repo.has_isbn(other_user.id, "9780140449136")
    assert not book_repo.has_isbn(sample_user.id, "9780140268867")

def test_search_books(book_repo, multiple_books, sample_user):
    """Test title search and pagination"""
    assert len(book_repo.search_books(sample_user.id)) == 5
    assert [b.title for b in book_repo.search_books(sample_user.id, query="volume 3")] == ["Volume 3"]

    page = book_repo.search_books(sample_user.id, limit=2, offset=2)
    assert [b.title for b in page] == ["Volume 3", "Volume 4"]
    assert book_repo.count_books(sample_user.id, query="Volume") == 5

def test_get_unread_by_series(book_repo, multiple_books, sample_user, db_session):
    loose = Book(owner_id=sample_user.id, isbn="9780140268867", title="The Iliad", summary="")
    db_session.add(loose)
    db_session.commit()

    no_series, by_series = book_repo.get_unread_by_series(sample_user.id)

    assert [b.title for b in no_series] == ["The Iliad"]
    (series, books), = by_series.items()
    assert series.name == "Penguin Classics"
    # Volumes 1 and 2 are read
    assert [b.title for b in books] == ["Volume 3", "Volume 4", "Volume 5"]

def test_set_authors_replaces(book_repo, sample_book_with_relationships, db_session):
    from librarian.sa.models import Author
    other = Author(name="Emily Wilson")
    db_session.add(other)
    db_session.flush()

    book_repo.set_authors(sample_book_with_relationships, [other.id])
    db_session.commit()
    db_session.refresh(sample_book_with_relationships)

    assert [a.name for a in sample_book_with_relationships.authors] == ["Emily Wilson"]
