# cli/utils.py
import click

def fail(message: str, code: int = 1):
    """Print an error and leave with a non-zero exit code"""
    click.echo(click.style(message, fg='red'), err=True)
    raise click.exceptions.Exit(code)
