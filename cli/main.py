# cli/main.py
import logging
import os
import click

from librarian.config import CONFIG_ENV, get_config
from .commands.book import book
from .commands.db import db
from .commands.scan import scan
from .commands.server import serve
from .commands.user import user

@click.group()
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False),
              default=None, help='TOML configuration file')
@click.option('--verbose', '-v', is_flag=True, help='Show debug output')
def cli(config_path, verbose):
    """Librarian, a personal library tracker"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    if config_path:
        # Through the environment so the server and its reloader see it too
        os.environ[CONFIG_ENV] = os.path.abspath(config_path)
    get_config.cache_clear()

cli.add_command(serve)
cli.add_command(db)
cli.add_command(user)
cli.add_command(book)
cli.add_command(scan)

def main():
    """Entry point for the CLI"""
    cli()

if __name__ == '__main__':
    main()
