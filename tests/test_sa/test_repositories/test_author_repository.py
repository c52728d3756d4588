# tests/test_sa/test_repositories/test_author_repository.py
import pytest
from datetime import date
from librarian.sa.repositories.author import AuthorRepository
from librarian.sa.repositories.tag import TagRepository
from librarian.sa.models import Author, Book, BookAuthor, Tag

@pytest.fixture
def author_repo(db_session):
    """Fixture to create an AuthorRepository instance"""
    return AuthorRepository(db_session)

def test_get_or_create_reuses_existing(author_repo, sample_author, db_session):
    """Test that an existing name is reused rather than duplicated"""
    author = author_repo.get_or_create("  Homer ")
    assert author.id == sample_author.id
    assert db_session.query(Author).count() == 1

def test_get_or_create_many_dedups(author_repo, db_session):
    authors = author_repo.get_or_create_many(["Homer", "", "Emily Wilson", "Homer"])
    db_session.commit()

    assert [a.name for a in authors] == ["Homer", "Emily Wilson"]
    assert db_session.query(Author).count() == 2

def test_tags_get_or_create_many(db_session, sample_tag):
    tags = TagRepository(db_session).get_or_create_many(["Epic", "Poetry"])
    db_session.commit()

    assert tags[0].id == sample_tag.id
    assert db_session.query(Tag).count() == 2

def test_list_names_for_owner(author_repo, sample_book_with_relationships, sample_user, other_user, db_session):
    db_session.add(Author(name="Unused"))
    db_session.commit()

    assert author_repo.list_names_for_owner(sample_user.id) == ["Homer"]
    assert author_repo.list_names_for_owner(other_user.id) == []
    assert TagRepository(db_session).list_names_for_owner(sample_user.id) == ["Epic"]

def test_get_books_for_owner_undated_first(author_repo, db_session, sample_user, sample_author):
    """Test that books without a date come first, then by publication date"""
    titles = [("B", date(2001, 1, 1)), ("A", date(1990, 5, 1)), ("Undated", None)]
    for i, (title, published) in enumerate(titles):
        book = Book(owner_id=sample_user.id, isbn=f"97800000000{i}0", title=title, summary="", published=published)
        db_session.add(book)
        db_session.flush()
        db_session.add(BookAuthor(book_id=book.id, author_id=sample_author.id))
    db_session.commit()

    books = author_repo.get_books_for_owner(sample_author.id, sample_user.id)
    assert [b.title for b in books] == ["Undated", "A", "B"]

def test_get_books_for_other_owner(author_repo, sample_book_with_relationships, sample_author, other_user):
    assert author_repo.get_books_for_owner(sample_author.id, other_user.id) == []
