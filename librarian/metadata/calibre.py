# librarian/metadata/calibre.py
"""Metadata lookup through Calibre's ``fetch-ebook-metadata`` tool.

The tool is run with ``--opf`` so that it prints an OPF package document on
stdout, and ``--cover`` so that it writes the cover art to a file.
"""
import logging
import subprocess
import tempfile
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from librarian.config import CalibreConfig
from librarian.errors import ProviderLookupFailed
from .types import BookDetails, MetadataProvider

logger = logging.getLogger(__name__)

PROVIDER = MetadataProvider.CALIBRE.value

# Calibre writes this date when the publication date is unknown
UNDEFINED_YEAR = 101


def _local_name(name: str) -> str:
    """Strip the namespace prefix, ``dc:title`` -> ``title``"""
    return name.rsplit(':', 1)[-1]


def _opf_attr(element: Tag, attr: str) -> Optional[str]:
    for key, value in element.attrs.items():
        if _local_name(key) == attr:
            return value
    return None


class OpfDocument:
    """Accessors over the ``metadata`` element of an OPF document"""

    def __init__(self, metadata: Tag):
        self.metadata = metadata

    def all(self, name: str) -> List[Tag]:
        return self.metadata.find_all(lambda t: _local_name(t.name) == name)

    def text(self, name: str) -> Optional[str]:
        for element in self.all(name):
            return element.get_text()
        return None

    def all_with_attr(self, name: str, attr: str, value: str) -> List[Tag]:
        return [e for e in self.all(name) if _opf_attr(e, attr) == value]

    def text_with_attr(self, name: str, attr: str, value: str) -> Optional[str]:
        for element in self.all_with_attr(name, attr, value):
            return element.get_text()
        return None


def _parse_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip()).date()
    except ValueError as e:
        raise ProviderLookupFailed(PROVIDER, f"Response contains an invalid date '{value}'", e)
    if parsed.year <= UNDEFINED_YEAR:
        return None
    return parsed


def parse_opf(document: str, cover: bytes = b"") -> Optional[BookDetails]:
    """Parse an OPF package document.

    Returns:
        The book details, or None if the document holds no metadata
    """
    soup = BeautifulSoup(document, 'html.parser')
    metadata = soup.find(lambda t: _local_name(t.name) == 'metadata')
    if metadata is None:
        return None

    opf = OpfDocument(metadata)

    authors = [
        e.get_text() for e in opf.all_with_attr('creator', 'role', 'aut')
        if e.get_text()
    ]
    tags = [e.get_text() for e in opf.all('subject') if e.get_text()]

    return BookDetails(
        isbn=opf.text_with_attr('identifier', 'scheme', 'ISBN'),
        title=opf.text('title'),
        authors=authors,
        tags=tags,
        summary=opf.text('description'),
        published=_parse_date(opf.text('date')),
        publisher=opf.text('publisher'),
        language=opf.text('language'),
        google_id=opf.text_with_attr('identifier', 'scheme', 'GOOGLE'),
        amazon_id=opf.text_with_attr('identifier', 'scheme', 'AMAZON'),
        cover=cover or None,
    )


def fetch_metadata(config: CalibreConfig, isbn: str) -> Optional[BookDetails]:
    """Run the Calibre fetcher for ``isbn``.

    Raises:
        ProviderLookupFailed: If the fetcher cannot be run, fails or times out
    """
    logger.debug(f"Fetching metadata for isbn '{isbn}'")

    with tempfile.TemporaryDirectory() as tmp_dir:
        cover_path = Path(tmp_dir) / "cover.jpg"
        try:
            result = subprocess.run(
                [config.fetcher, "--isbn", isbn, "--opf", "--cover", str(cover_path)],
                capture_output=True,
                timeout=config.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise ProviderLookupFailed(PROVIDER, "Metadata fetcher timed out", e)
        except OSError as e:
            raise ProviderLookupFailed(PROVIDER, "Could not launch metadata fetcher", e)

        logger.debug(f"Stdout:\n{result.stdout!r}")
        logger.debug(f"Stderr:\n{result.stderr!r}")

        if result.returncode != 0:
            logger.error(f"Fetcher exited with {result.returncode}: {result.stderr!r}")
            raise ProviderLookupFailed(PROVIDER, "Fetcher failed to get the metadata")

        try:
            document = result.stdout.decode('utf-8')
        except UnicodeDecodeError as e:
            raise ProviderLookupFailed(PROVIDER, "Response is not a valid utf-8 document", e)

        cover = cover_path.read_bytes() if cover_path.exists() else b""

    return parse_opf(document, cover)
