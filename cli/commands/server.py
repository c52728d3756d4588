# cli/commands/server.py
import click
import uvicorn

@click.command()
@click.option('--host', default='127.0.0.1', help='Interface to listen on')
@click.option('--port', default=8000, type=int, help='Port to listen on')
@click.option('--reload/--no-reload', default=False, help='Restart when the code changes')
def serve(host: str, port: int, reload: bool):
    """Run the web server

    Example:
        librarian serve --host 0.0.0.0 --port 8080
    """
    click.echo(click.style(f"Serving on http://{host}:{port}", fg='blue'))
    uvicorn.run("api.main:app", host=host, port=port, reload=reload)
