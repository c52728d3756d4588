# cli/commands/db.py
import click
from librarian.sa.database import get_database

@click.group()
def db():
    """Database commands"""
    pass

@db.command()
def init():
    """Create the database tables"""
    database = get_database()
    database.init_db()
    click.echo(click.style("Database initialized", fg='green'))
