# tests/conftest.py
import os
import sys
import pytest
from datetime import date
from pathlib import Path
from sqlalchemy.sql import text
from sqlalchemy.orm import Session

# Add project root to Python path
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from librarian.config import Config, MetadataConfig
from librarian.sa.database import Database
from librarian.sa.models import (
    Base, Author, Book, BookAuthor, BookSeries, BookTag, Series, Tag, User
)

@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory):
    """Create a temporary directory for the test database."""
    test_dir = tmp_path_factory.mktemp("test_db")
    return str(test_dir / "test_library.db")

@pytest.fixture(scope="session")
def database(test_db_path):
    """Create a test database instance"""
    db = Database(f"sqlite:///{test_db_path}")
    
    # Drop all tables and recreate schema
    Base.metadata.drop_all(db.engine)
    Base.metadata.create_all(db.engine)
    
    yield db
    
    db.engine.dispose()
    try:
        os.remove(test_db_path)
    except OSError:
        pass

@pytest.fixture(scope="function")
def db_session(database):
    """Create a new database session for a test"""
    session: Session = database.get_session()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture(autouse=True)
def cleanup_db(db_session):
    """Clean up database tables before each test"""
    # Delete all data from tables in reverse order of dependencies
    for table in (
        "booktag", "bookauthor", "bookseries", "wishauthor", "wishseries",
        "wish", "book", "series", "author", "tag", "users",
    ):
        db_session.execute(text(f"DELETE FROM {table}"))
    db_session.commit()
    yield
    # Clean up after test as well
    db_session.rollback()

@pytest.fixture
def test_config(test_db_path, tmp_path):
    """Configuration pointing at the test database and a temporary image directory"""
    return Config(
        database_url=f"sqlite:///{test_db_path}",
        metadata=MetadataConfig(image_dir=tmp_path / "images"),
    )

@pytest.fixture
def sample_user(db_session):
    """Create a sample user for testing."""
    user = User(name="alice")
    db_session.add(user)
    db_session.commit()
    return user

@pytest.fixture
def other_user(db_session):
    user = User(name="bob")
    db_session.add(user)
    db_session.commit()
    return user

@pytest.fixture
def sample_author(db_session):
    """Create a sample author for testing."""
    author = Author(name="Homer")
    db_session.add(author)
    db_session.commit()
    return author

@pytest.fixture
def sample_tag(db_session):
    tag = Tag(name="Epic")
    db_session.add(tag)
    db_session.commit()
    return tag

@pytest.fixture
def sample_series(db_session, sample_user):
    """Create a sample series for testing."""
    series = Series(owner_id=sample_user.id, name="Penguin Classics")
    db_session.add(series)
    db_session.commit()
    return series

@pytest.fixture
def sample_book(db_session, sample_user):
    """Create a sample book for testing."""
    book = Book(
        owner_id=sample_user.id,
        isbn="9780140449136",
        title="The Odyssey",
        summary="Odysseus goes home.",
        published=date(2003, 4, 29),
        publisher="Penguin",
        language="eng",
        page_count=541
    )
    db_session.add(book)
    db_session.commit()
    return book

@pytest.fixture
def sample_book_with_relationships(db_session, sample_book, sample_author, sample_tag, sample_series):
    """Create a book with all relationships for testing."""
    db_session.add(BookAuthor(book_id=sample_book.id, author_id=sample_author.id))
    db_session.add(BookTag(book_id=sample_book.id, tag_id=sample_tag.id))
    db_session.add(BookSeries(book_id=sample_book.id, series_id=sample_series.id, number=1))
    db_session.commit()
    db_session.refresh(sample_book)
    return sample_book

@pytest.fixture
def multiple_books(db_session, sample_user, sample_author, sample_series):
    """Create five books by the same author, in the same series."""
    books = []
    for i in range(1, 6):
        book = Book(
            owner_id=sample_user.id,
            isbn=f"978000000000{i}",
            title=f"Volume {i}",
            summary="",
            published=date(2000 + i, 1, 1),
            read=i <= 2
        )
        db_session.add(book)
        db_session.flush()
        db_session.add(BookAuthor(book_id=book.id, author_id=sample_author.id))
        db_session.add(BookSeries(book_id=book.id, series_id=sample_series.id, number=i))
        books.append(book)
    db_session.commit()
    return books
