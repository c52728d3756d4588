# librarian/metadata/providers.py
from typing import Optional

from librarian.config import Config
from . import calibre, openlibrary
from .types import BookDetails, MetadataProvider


def fetch_metadata(config: Config, isbn: str, provider: MetadataProvider) -> Optional[BookDetails]:
    """Fetch book details for ``isbn`` from ``provider``.

    Returns:
        The details, or None when the provider does not know the ISBN

    Raises:
        ProviderLookupFailed: If the provider could not be queried
    """
    if provider == MetadataProvider.CALIBRE:
        return calibre.fetch_metadata(config.calibre, isbn)
    return openlibrary.fetch_metadata(config.openlibrary, isbn)
