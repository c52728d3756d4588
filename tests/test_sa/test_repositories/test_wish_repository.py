# tests/test_sa/test_repositories/test_wish_repository.py
import pytest
from librarian.errors import SeriesPositionTaken
from librarian.sa.repositories.wish import WishRepository
from librarian.sa.models import Author, Wish, WishAuthor

@pytest.fixture
def wish_repo(db_session):
    return WishRepository(db_session)

def test_create_wish(wish_repo, sample_user, sample_author, db_session):
    wish = wish_repo.create_wish(sample_user.id, "The Aeneid", authors=["Homer", "Virgil"],
                                 series_name="Penguin Classics", number=4)

    assert sorted(a.name for a in wish.authors) == ["Homer", "Virgil"]
    assert wish.wish_series.number == 4
    assert wish.wish_series.series.name == "Penguin Classics"
    assert db_session.query(Author).count() == 2

def test_create_wish_series_without_number(wish_repo, sample_user):
    with pytest.raises(ValueError):
        wish_repo.create_wish(sample_user.id, "The Aeneid", series_name="Penguin Classics")

def test_create_wish_blank_names(wish_repo, sample_user, db_session):
    with pytest.raises(ValueError):
        wish_repo.create_wish(sample_user.id, "  ")
    with pytest.raises(ValueError):
        wish_repo.create_wish(sample_user.id, "The Aeneid", series_name=" ", number=1)
    assert db_session.query(Wish).count() == 0

def test_create_wish_position_taken(wish_repo, sample_user, db_session):
    wish_repo.create_wish(sample_user.id, "First", series_name="Penguin Classics", number=1)

    with pytest.raises(SeriesPositionTaken):
        wish_repo.create_wish(sample_user.id, "Second", series_name="Penguin Classics", number=1)
    assert db_session.query(Wish).count() == 1

def test_list_wishes_per_owner(wish_repo, sample_user, other_user):
    wish_repo.create_wish(sample_user.id, "B")
    wish_repo.create_wish(sample_user.id, "A")
    wish_repo.create_wish(other_user.id, "C")

    assert [w.name for w in wish_repo.list_wishes(sample_user.id)] == ["A", "B"]

def test_delete_wish(wish_repo, sample_user, other_user, db_session):
    wish = wish_repo.create_wish(sample_user.id, "The Aeneid", authors=["Virgil"])

    assert wish_repo.delete_wish(wish.id, other_user.id) is False
    assert wish_repo.delete_wish(wish.id, sample_user.id) is True
    assert db_session.query(Wish).count() == 0
    assert db_session.query(WishAuthor).count() == 0
