# cli/commands/book.py
import click
from typing import Optional
from librarian.config import get_config
from librarian.errors import ProviderLookupFailed
from librarian.metadata.providers import fetch_metadata
from librarian.metadata.types import MetadataProvider
from librarian.resolvers.book_creator import BookCreator
from librarian.sa.repositories.book import BookRepository
from librarian.sa.repositories.user import UserRepository
from librarian.utils.covers import CoverStore
from librarian.utils.isbn import normalize_isbn
from librarian.sa.database import get_database
from ..utils import fail

@click.group()
def book():
    """Book related commands"""
    pass

@book.command()
@click.option('--user', 'user_name', required=True, help='Owner of the book')
@click.option('--isbn', required=True, help='ISBN of the book')
@click.option('--provider', type=click.Choice([p.value for p in MetadataProvider]), default=None,
              help='Metadata provider, the configured default when missing')
def add(user_name: str, isbn: str, provider: Optional[str]):
    """Look up a book by ISBN and add it to a user's library

    Example:
        librarian book add --user alice --isbn 978-0-14-044913-6 --provider openlibrary
    """
    config = get_config()
    providers = config.metadata.available_providers()
    if not providers:
        fail("Metadata lookups are disabled in the configuration")
    chosen = MetadataProvider(provider) if provider else config.metadata.pick_default()
    if chosen not in providers:
        fail(f"Provider '{chosen.value}' is not enabled")

    isbn = normalize_isbn(isbn)
    with get_database().get_db() as session:
        owner = UserRepository(session).get_by_name(user_name)
        if not owner:
            fail(f"No user named '{user_name}'")
        if BookRepository(session).has_isbn(owner.id, isbn):
            fail(f"ISBN {isbn} is already in {owner.name}'s library")

        click.echo(click.style(f"Looking up {isbn} on {chosen.display_name}...", fg='blue'))
        try:
            details = fetch_metadata(config, isbn, chosen)
        except ProviderLookupFailed as e:
            fail(f"Lookup failed: {e}")
        if details is None:
            fail(f"No book with ISBN {isbn} found on {chosen.display_name}")
        details.isbn = details.isbn or isbn

        try:
            created = BookCreator(session, CoverStore(config.metadata.image_dir)).create_book(owner, details)
        except ValueError as e:
            fail(str(e))

        click.echo("Successfully added book:")
        click.echo(f"  Title: {created.title}")
        click.echo(f"  Author(s): {', '.join(author.name for author in created.authors)}")
        if created.book_series:
            click.echo(f"  Series: {created.book_series.series.name} #{created.book_series.number}")

@book.command(name='list')
@click.option('--user', 'user_name', required=True, help='Owner of the books')
@click.option('--query', default=None, help='Only titles containing this text')
def list_books(user_name: str, query: Optional[str]):
    """List a user's books"""
    with get_database().get_db() as session:
        owner = UserRepository(session).get_by_name(user_name)
        if not owner:
            fail(f"No user named '{user_name}'")
        books = BookRepository(session).search_books(owner.id, query=query, limit=1000)
        for b in books:
            authors = ', '.join(a.name for a in b.authors)
            click.echo(click.style(b.isbn, fg='blue') + f"  {b.title}" +
                       (click.style(f" by {authors}", fg='cyan') if authors else ""))
        click.echo(click.style(f"\n{len(books)} book(s)", fg='green'))
