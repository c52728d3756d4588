# cli/commands/user.py
import click
from librarian.sa.repositories.user import UserRepository
from librarian.sa.database import get_database
from ..utils import fail

@click.group()
def user():
    """User related commands"""
    pass

@user.command()
@click.argument('name')
def create(name: str):
    """Create a user

    The name must match what the reverse proxy sends in its user header.
    """
    with get_database().get_db() as session:
        try:
            created = UserRepository(session).create_user(name)
        except ValueError as e:
            fail(str(e))
        click.echo(click.style("Created user ", fg='green') + click.style(created.name, fg='cyan') +
                   click.style(f" ({created.id})", fg='blue'))

@user.command(name='list')
def list_users():
    """List all users"""
    with get_database().get_db() as session:
        users = UserRepository(session).list_users()
        if not users:
            click.echo(click.style("No users yet", fg='yellow'))
            return
        for u in users:
            public = click.style(" [public ongoing]", fg='blue') if u.public_ongoing else ""
            click.echo(click.style(u.name, fg='cyan') + f" ({u.id})" + public)
