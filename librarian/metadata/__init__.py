# librarian/metadata/__init__.py
from .types import BookDetails, MetadataProvider, SeriesPosition

__all__ = [
    'BookDetails',
    'MetadataProvider',
    'SeriesPosition',
]
