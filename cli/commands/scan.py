# cli/commands/scan.py
import click
from typing import Optional
from librarian.config import get_config
from librarian.errors import DetectionUnavailable, PermissionDenied
from librarian.metadata.types import MetadataProvider
from librarian.scanner import ScanSession, select_detector
from librarian.scanner.base import Camera
from ..utils import fail

def open_camera(device: int) -> Camera:
    # OpenCV is only needed, and only installed, for scanning
    from librarian.scanner.camera import OpenCVCamera
    return OpenCVCamera(device)

@click.command()
@click.option('--provider', type=click.Choice([p.value for p in MetadataProvider]), default=None,
              help='Metadata provider the add page should ask')
@click.option('--base-url', default=None, help='URL of the add-book page')
@click.option('--device', default=None, type=int, help='Camera index')
@click.option('--no-open', is_flag=True, help='Print the add-book URL instead of opening it')
@click.option('--timeout', default=None, type=float, help='Give up after this many seconds')
def scan(provider: Optional[str], base_url: Optional[str], device: Optional[int], no_open: bool,
         timeout: Optional[float]):
    """Scan an ISBN barcode with the camera and open the add-book page

    Example:
        librarian scan --provider openlibrary --no-open
    """
    config = get_config()
    try:
        detector = select_detector()
    except DetectionUnavailable as e:
        fail(f"Barcode scanning is disabled: {e}")

    providers = config.metadata.available_providers()
    if provider is not None and MetadataProvider(provider) not in providers:
        fail(f"Provider '{provider}' is not enabled")
    if provider is None and providers:
        provider = config.metadata.pick_default().value
    device = config.scanner.device if device is None else device

    def navigate(url: str):
        if no_open:
            click.echo(url)
        else:
            click.echo(click.style(f"Opening {url}", fg='green'))
            click.launch(url)

    session = ScanSession(
        camera_factory=lambda: open_camera(device),
        detector=detector,
        navigator=navigate,
        provider_source=lambda: provider,
        base_url=base_url or config.scanner.base_url,
        interval=config.scanner.interval,
    )

    try:
        session.start()
    except PermissionDenied as e:
        fail(f"Camera unavailable: {e}")

    click.echo(click.style(f"Scanning with {detector.name}, press Ctrl+C to stop", fg='blue'), err=True)
    try:
        finished = session.wait(timeout)
    except KeyboardInterrupt:
        finished = False
    if not finished:
        session.stop()
        click.echo(click.style("Scan cancelled", fg='yellow'), err=True)

    if session.error is not None:
        fail(str(session.error))
    if session.detected is None:
        raise click.exceptions.Exit(1)
