# librarian/metadata/openlibrary.py
import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional

import requests
from dateutil import parser as date_parser

from librarian.config import OpenLibraryConfig
from librarian.errors import ProviderLookupFailed
from .types import BookDetails, MetadataProvider

logger = logging.getLogger(__name__)

PROVIDER = MetadataProvider.OPEN_LIBRARY.value
OPEN_LIBRARY = "https://openlibrary.org"
COVERS = "https://covers.openlibrary.org"
AUTHOR_ROLE = "/type/author_role"


def parse_publish_date(value: Optional[str]) -> Optional[date]:
    """Parse Open Library's free-form ``publish_date``.

    Values range from ISO dates to "March 1998" or a bare year. A bare year
    maps to January 1st; anything unparsable is dropped.
    """
    if not value:
        return None
    value = value.strip()
    if value.isdigit():
        try:
            return date(int(value), 1, 1)
        except ValueError:
            return None
    try:
        return date_parser.parse(value, default=datetime(1, 1, 1)).date()
    except (ValueError, OverflowError):
        return None


def _description_text(description: Any) -> Optional[str]:
    # Either a plain string or {"type": "/type/text", "value": "..."}
    if description is None:
        return None
    if isinstance(description, dict):
        return description.get('value')
    return str(description)


class OpenLibraryClient:
    def __init__(self, config: OpenLibraryConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        self.session.headers['User-Agent'] = f"librarian ({config.contact})"

    def _get(self, url: str) -> Optional[requests.Response]:
        """GET ``url``; None on 404, raises on any other error status"""
        try:
            response = self.session.get(url, timeout=self.config.timeout)
            if response.status_code == 404:
                return None
            response.raise_for_status()
            return response
        except requests.RequestException as e:
            raise ProviderLookupFailed(PROVIDER, f"Error in HTTP request to {url}", e)

    def _get_json(self, path: str, what: str) -> Optional[Dict[str, Any]]:
        response = self._get(f"{OPEN_LIBRARY}{path}")
        if response is None:
            return None
        logger.debug(f"{what}:\n{response.text}")
        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Could not parse {what.lower()}: {e}")
            raise ProviderLookupFailed(PROVIDER, f"Could not parse JSON {what.lower()}", e)
        if not isinstance(data, dict):
            raise ProviderLookupFailed(PROVIDER, f"Unexpected {what.lower()} document")
        return data

    def _authors(self, work: Dict[str, Any]) -> List[str]:
        authors = []
        for reference in work.get('authors') or []:
            role = (reference.get('type') or {}).get('key')
            if role != AUTHOR_ROLE:
                continue
            key = (reference.get('author') or {}).get('key')
            if not key:
                continue
            author = self._get_json(f"{key}.json", "Author")
            if author is None:
                raise ProviderLookupFailed(PROVIDER, f"Author {key} was not found")
            if author.get('name'):
                authors.append(author['name'])
        return authors

    def _cover(self, covers: List[int]) -> Optional[bytes]:
        cover_ids = [c for c in covers if isinstance(c, int) and c > 0]
        if not cover_ids:
            return None
        try:
            response = self._get(f"{COVERS}/b/id/{cover_ids[0]}-M.jpg")
        except ProviderLookupFailed as e:
            logger.warning(f"Could not download cover {cover_ids[0]}: {e.cause}")
            return None
        return response.content if response is not None else None

    def fetch_metadata(self, isbn: str) -> Optional[BookDetails]:
        """Look up an edition by ISBN, then its work and authors.

        Returns:
            The book details, or None if Open Library does not know the ISBN

        Raises:
            ProviderLookupFailed: On HTTP errors, malformed documents or
                an edition without a work
        """
        logger.debug(f"Querying OpenLibrary for isbn '{isbn}'")

        edition = self._get_json(f"/isbn/{isbn}.json", "Edition")
        if edition is None:
            return None

        works = edition.get('works') or []
        if not works:
            raise ProviderLookupFailed(PROVIDER, "Work is missing from edition")
        if len(works) > 1:
            logger.warning(f"More than one work in edition: {works}")

        work = self._get_json(f"{works[0]['key']}.json", "Work")
        if work is None:
            raise ProviderLookupFailed(PROVIDER, "Expected resource was not found")

        language = None
        for reference in edition.get('languages') or []:
            key = reference.get('key', '')
            if key.startswith('/languages/'):
                language = key[len('/languages/'):]
            break

        publishers = edition.get('publishers') or []

        return BookDetails(
            isbn=isbn,
            title=work.get('title'),
            authors=self._authors(work),
            tags=list(work.get('subjects') or []),
            summary=_description_text(work.get('description')),
            published=parse_publish_date(edition.get('publish_date')),
            publisher=publishers[0] if publishers else None,
            language=language,
            page_count=edition.get('number_of_pages'),
            cover=self._cover(edition.get('covers') or []),
        )


def fetch_metadata(config: OpenLibraryConfig, isbn: str) -> Optional[BookDetails]:
    return OpenLibraryClient(config).fetch_metadata(isbn)
